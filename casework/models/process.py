"""
MainProcess, IndividualProcess and ProcessHistory database models
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Date, DateTime, Boolean, Enum, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from casework.core.database import Base
from casework.models.enums import MainProcessStatus, IndividualProcessStatus


class MainProcess(Base):
    """
    Case opened for a company, grouping one individual process per worker.

    The stored status is the admin-managed lifecycle; the status shown to
    users is calculated from the individual processes.
    """
    __tablename__ = "main_processes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    reference_number = Column(String, nullable=False, unique=True, index=True)
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=True, index=True)
    contact_person_id = Column(String(36), ForeignKey("people.id"), nullable=True)
    process_type_id = Column(String(36), ForeignKey("process_types.id"), nullable=True, index=True)
    workplace_city = Column(String, nullable=True)
    consulate = Column(String, nullable=True)
    is_urgent = Column(Boolean, default=False, nullable=False)
    request_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(Enum(MainProcessStatus), default=MainProcessStatus.DRAFT, nullable=False, index=True)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    individual_processes = relationship("IndividualProcess", back_populates="main_process", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<MainProcess(id={self.id}, reference_number={self.reference_number}, status={self.status.value})>"


class IndividualProcess(Base):
    """
    One worker's process inside a main process.

    Holds the government protocol fields (MRE office number, DOU
    publication, protocol number, RNM number) from which the submission
    progress is derived.
    """
    __tablename__ = "individual_processes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    main_process_id = Column(String(36), ForeignKey("main_processes.id", ondelete="CASCADE"), nullable=False, index=True)
    person_id = Column(String(36), ForeignKey("people.id"), nullable=False, index=True)
    passport_id = Column(String(36), ForeignKey("passports.id"), nullable=True, index=True)
    company_applicant_id = Column(String(36), ForeignKey("companies.id"), nullable=True)
    legal_framework_id = Column(String(36), ForeignKey("legal_frameworks.id"), nullable=True, index=True)
    cbo_code = Column(String, nullable=True)
    status = Column(Enum(IndividualProcessStatus), default=IndividualProcessStatus.PENDING_DOCUMENTS, nullable=False, index=True)

    # Government protocol fields
    mre_office_number = Column(String, nullable=True)
    dou_number = Column(String, nullable=True)
    dou_section = Column(String, nullable=True)
    dou_page = Column(String, nullable=True)
    dou_date = Column(Date, nullable=True)
    protocol_number = Column(String, nullable=True)
    rnm_number = Column(String, nullable=True)
    rnm_deadline = Column(Date, nullable=True)
    appointment_datetime = Column(DateTime, nullable=True)

    deadline_date = Column(Date, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    main_process = relationship("MainProcess", back_populates="individual_processes")

    def __repr__(self):
        return f"<IndividualProcess(id={self.id}, person_id={self.person_id}, status={self.status.value})>"


class ProcessHistory(Base):
    """Audit record of a status change on an individual process"""
    __tablename__ = "process_history"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    individual_process_id = Column(String(36), ForeignKey("individual_processes.id", ondelete="CASCADE"), nullable=False, index=True)
    previous_status = Column(Enum(IndividualProcessStatus), nullable=True)
    new_status = Column(Enum(IndividualProcessStatus), nullable=False)
    changed_by = Column(String(36), ForeignKey("user_profiles.id"), nullable=False, index=True)
    changed_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    extra = Column(JSON, nullable=True)

    def __repr__(self):
        previous = self.previous_status.value if self.previous_status else None
        return f"<ProcessHistory(individual_process_id={self.individual_process_id}, {previous} -> {self.new_status.value})>"
