"""
ProcessRequest database model
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Date, DateTime, Boolean, Enum, ForeignKey, Text
from casework.core.database import Base
from casework.models.enums import RequestStatus


class ProcessRequest(Base):
    """
    Request submitted by a client company for a new process.

    Status transitions: pending → approved (creates a main process) or
    pending → rejected (with a reason). Only pending requests can change.
    """
    __tablename__ = "process_requests"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)
    contact_person_id = Column(String(36), ForeignKey("people.id"), nullable=False)
    process_type_id = Column(String(36), ForeignKey("process_types.id"), nullable=False)
    workplace_city = Column(String, nullable=False)
    consulate = Column(String, nullable=True)
    is_urgent = Column(Boolean, default=False, nullable=False)
    request_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    status = Column(Enum(RequestStatus), default=RequestStatus.PENDING, nullable=False, index=True)
    reviewed_by = Column(String(36), ForeignKey("user_profiles.id"), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    approved_main_process_id = Column(String(36), ForeignKey("main_processes.id"), nullable=True)
    created_by = Column(String(36), ForeignKey("user_profiles.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<ProcessRequest(id={self.id}, company_id={self.company_id}, status={self.status.value})>"

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING
