"""
DeliveredDocument and DeliveredDocumentCondition database models
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Enum, Date, DateTime, Boolean, ForeignKey, Text, Index
from casework.core.database import Base
from casework.models.enums import DeliveredDocumentStatus


class DeliveredDocument(Base):
    """
    Version of a document delivered for an individual process.

    Features:
    - Placeholders (status not_started) are seeded for every document the
      legal framework requires; the first upload fills the placeholder
    - Later uploads create a new version and clear is_latest on the old one
    - SHA256 hash for duplicate detection within a process
    - issue_date / expiry_date feed the validity rules of the checklist
    """
    __tablename__ = "documents_delivered"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    individual_process_id = Column(String(36), ForeignKey("individual_processes.id", ondelete="CASCADE"), nullable=False, index=True)
    document_type_id = Column(String(36), ForeignKey("document_types.id"), nullable=False, index=True)
    person_id = Column(String(36), ForeignKey("people.id"), nullable=True)
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=True, index=True)
    filename = Column(String, default="", nullable=False)
    sha256 = Column(String(64), nullable=True, index=True)
    mime_type = Column(String, default="", nullable=False)
    size_bytes = Column(Integer, default=0, nullable=False)
    stored_path = Column(String, nullable=True)
    status = Column(Enum(DeliveredDocumentStatus), default=DeliveredDocumentStatus.NOT_STARTED, nullable=False, index=True)
    issue_date = Column(Date, nullable=True)
    expiry_date = Column(Date, nullable=True)
    uploaded_by = Column(String(36), ForeignKey("user_profiles.id"), nullable=True)
    uploaded_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    reviewed_by = Column(String(36), ForeignKey("user_profiles.id"), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    version = Column(Integer, default=1, nullable=False)
    is_latest = Column(Boolean, default=True, nullable=False, index=True)

    __table_args__ = (
        Index('idx_process_doctype', 'individual_process_id', 'document_type_id'),
    )

    def __repr__(self):
        return f"<DeliveredDocument(id={self.id}, document_type_id={self.document_type_id}, v{self.version}, status={self.status.value})>"

    @property
    def is_placeholder(self) -> bool:
        """True while nothing has been uploaded for this record"""
        return self.status in (DeliveredDocumentStatus.NOT_STARTED, DeliveredDocumentStatus.PENDING_UPLOAD)


class DeliveredDocumentCondition(Base):
    """Fulfilment of one document-type condition by a delivered document"""
    __tablename__ = "document_delivered_conditions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    document_delivered_id = Column(String(36), ForeignKey("documents_delivered.id", ondelete="CASCADE"), nullable=False, index=True)
    document_type_condition_id = Column(String(36), ForeignKey("document_type_conditions.id"), nullable=False)
    is_fulfilled = Column(Boolean, default=False, nullable=False)
    fulfilled_at = Column(DateTime, nullable=True)
    fulfilled_by = Column(String(36), ForeignKey("user_profiles.id"), nullable=True)
    expires_at = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
