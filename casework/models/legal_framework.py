"""
ProcessType, LegalFramework and LegalFrameworkInfoRequirement database models
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Enum, DateTime, Boolean, ForeignKey, Text
from casework.core.database import Base
from casework.models.enums import EntityType, ResponsibleParty


class ProcessType(Base):
    """Kind of immigration process (work visa, residence authorization...)"""
    __tablename__ = "process_types"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    estimated_days = Column(Integer, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<ProcessType(id={self.id}, name={self.name})>"


class LegalFramework(Base):
    """
    Legal basis (normative resolution) of an individual process.

    The legal framework decides which documents and info fields the
    requirements checklist asks for.
    """
    __tablename__ = "legal_frameworks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    name = Column(String, nullable=False)
    process_type_id = Column(String(36), ForeignKey("process_types.id"), nullable=True, index=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<LegalFramework(id={self.id}, name={self.name})>"


class LegalFrameworkInfoRequirement(Base):
    """
    Standalone info field required by a legal framework, e.g. the person's
    mother name or the company's tax id.
    """
    __tablename__ = "legal_framework_info_requirements"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    legal_framework_id = Column(String(36), ForeignKey("legal_frameworks.id", ondelete="CASCADE"), nullable=False, index=True)
    entity_type = Column(Enum(EntityType), nullable=False)
    field_path = Column(String, nullable=False)
    label = Column(String, nullable=False)
    label_en = Column(String, nullable=True)
    field_type = Column(String, default="text", nullable=False)
    responsible_party = Column(Enum(ResponsibleParty), default=ResponsibleParty.CLIENT, nullable=False)
    is_required = Column(Boolean, default=True, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<LegalFrameworkInfoRequirement(id={self.id}, {self.entity_type.value}.{self.field_path})>"
