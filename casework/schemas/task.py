"""
Task Pydantic schemas
"""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, model_validator
from casework.models.enums import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    individual_process_id: Optional[str] = None
    main_process_id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    due_date: Optional[date] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: Optional[str] = None

    @model_validator(mode="after")
    def validate_target(self):
        if not self.individual_process_id and not self.main_process_id:
            raise ValueError("A task must belong to a main or individual process")
        return self


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    assigned_to: Optional[str] = None


class TaskResponse(BaseModel):
    id: str = Field(..., description="Task UUID")
    individual_process_id: Optional[str] = None
    main_process_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    priority: TaskPriority
    status: TaskStatus
    assigned_to: Optional[str] = None
    created_by: str
    completed_at: Optional[datetime] = None
    completed_by: Optional[str] = None
    is_overdue: bool = False
    created_at: datetime

    class Config:
        from_attributes = True
