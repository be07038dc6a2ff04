"""
Task database model
"""
import uuid
from datetime import date, datetime
from sqlalchemy import Column, String, Date, DateTime, Enum, ForeignKey, Text
from casework.core.database import Base
from casework.models.enums import TaskPriority, TaskStatus


class Task(Base):
    """Follow-up work item attached to a main or individual process"""
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    individual_process_id = Column(String(36), ForeignKey("individual_processes.id", ondelete="CASCADE"), nullable=True, index=True)
    main_process_id = Column(String(36), ForeignKey("main_processes.id", ondelete="CASCADE"), nullable=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(Date, nullable=True, index=True)
    priority = Column(Enum(TaskPriority), default=TaskPriority.MEDIUM, nullable=False)
    status = Column(Enum(TaskStatus), default=TaskStatus.TODO, nullable=False, index=True)
    assigned_to = Column(String(36), ForeignKey("user_profiles.id"), nullable=True, index=True)
    created_by = Column(String(36), ForeignKey("user_profiles.id"), nullable=False)
    completed_at = Column(DateTime, nullable=True)
    completed_by = Column(String(36), ForeignKey("user_profiles.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Task(id={self.id}, title={self.title}, status={self.status.value})>"

    @property
    def is_overdue(self) -> bool:
        """Due date passed and the task is still open"""
        if self.due_date is None:
            return False
        if self.status in (TaskStatus.COMPLETED, TaskStatus.CANCELLED):
            return False
        return self.due_date < date.today()
