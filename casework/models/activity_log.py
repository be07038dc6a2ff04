"""
ActivityLog database model
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, JSON, Index
from casework.core.database import Base


class ActivityLog(Base):
    """
    Who did what to which record.

    entity_type/entity_id point at any record (process request, main or
    individual process, delivered document, task); details holds a small
    JSON payload describing the change.
    """
    __tablename__ = "activity_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    user_id = Column(String(36), ForeignKey("user_profiles.id"), nullable=False, index=True)
    action = Column(String, nullable=False, index=True)
    entity_type = Column(String, nullable=False)
    entity_id = Column(String(36), nullable=False)
    details = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    __table_args__ = (
        Index('idx_activity_entity', 'entity_type', 'entity_id'),
    )

    def __repr__(self):
        return f"<ActivityLog(user_id={self.user_id}, {self.action} {self.entity_type}:{self.entity_id})>"
