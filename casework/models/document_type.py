"""
DocumentType and its requirement configuration models
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Enum, DateTime, Boolean, ForeignKey, Text, Index
from casework.core.database import Base
from casework.models.enums import EntityType, ResponsibleParty, ValidityType, WorkflowType


class DocumentType(Base):
    """Kind of document (passport copy, criminal record, diploma...)"""
    __tablename__ = "document_types"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    name = Column(String, nullable=False)
    code = Column(String, nullable=True, index=True)
    category = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<DocumentType(id={self.id}, name={self.name})>"


class DocumentTypeLegalFramework(Base):
    """
    Association making a document type required (or optional) for a legal
    framework, with an optional validity rule.

    Example: criminal record, max_age 90 days -> must be issued in the last
    90 days; passport, min_remaining 180 days -> must be valid for 180 more days.
    """
    __tablename__ = "document_types_legal_frameworks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    document_type_id = Column(String(36), ForeignKey("document_types.id", ondelete="CASCADE"), nullable=False, index=True)
    legal_framework_id = Column(String(36), ForeignKey("legal_frameworks.id", ondelete="CASCADE"), nullable=False, index=True)
    is_required = Column(Boolean, default=True, nullable=False)
    responsible_party = Column(Enum(ResponsibleParty), nullable=True)
    workflow_type = Column(Enum(WorkflowType), nullable=True)
    validity_type = Column(Enum(ValidityType), nullable=True)
    validity_days = Column(Integer, nullable=True)
    sort_order = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    __table_args__ = (
        Index('idx_doctype_framework', 'document_type_id', 'legal_framework_id', unique=True),
    )

    def __repr__(self):
        return f"<DocumentTypeLegalFramework(document_type_id={self.document_type_id}, legal_framework_id={self.legal_framework_id})>"


class DocumentTypeFieldMapping(Base):
    """
    Info field that travels with a document type: when the document is
    required, the field must also be filled (e.g. passport number for the
    passport copy).
    """
    __tablename__ = "document_type_field_mappings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    document_type_id = Column(String(36), ForeignKey("document_types.id", ondelete="CASCADE"), nullable=False, index=True)
    entity_type = Column(Enum(EntityType), nullable=False)
    field_path = Column(String, nullable=False)
    label = Column(String, nullable=False)
    label_en = Column(String, nullable=True)
    field_type = Column(String, default="text", nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        Index('idx_mapping_entity_field', 'entity_type', 'field_path'),
    )


class DocumentTypeCondition(Base):
    """Condition a delivered document must meet (apostilled, translated...)"""
    __tablename__ = "document_type_conditions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    document_type_id = Column(String(36), ForeignKey("document_types.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    has_expiration = Column(Boolean, default=False, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
