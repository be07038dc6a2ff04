"""
Dashboard Pydantic schemas
"""
from datetime import date, datetime
from typing import Dict, Optional
from pydantic import BaseModel, Field
from casework.models.enums import DeliveredDocumentStatus, IndividualProcessStatus


class ProcessStats(BaseModel):
    """Individual process counts by status"""
    total: int
    status_counts: Dict[IndividualProcessStatus, int] = Field(default_factory=dict)
    status_percentages: Dict[IndividualProcessStatus, float] = Field(default_factory=dict)


class CompletionRate(BaseModel):
    """Completion of individual processes created in the last 30 days"""
    total_processes: int
    completed_processes: int
    completion_rate: float
    average_days_to_complete: int


class ReviewQueueItem(BaseModel):
    """Delivered document waiting for an admin review"""
    id: str
    individual_process_id: str
    document_type_id: str
    document_type_name: Optional[str] = None
    person_name: Optional[str] = None
    reference_number: Optional[str] = None
    filename: str
    status: DeliveredDocumentStatus
    version: int
    uploaded_at: datetime


class UpcomingDeadline(BaseModel):
    """Open individual process whose deadline falls in the next 30 days"""
    individual_process_id: str
    status: IndividualProcessStatus
    deadline_date: date
    days_remaining: int
    person_name: Optional[str] = None
    reference_number: Optional[str] = None
    process_type_name: Optional[str] = None


class PersonDocumentStatus(BaseModel):
    """Latest delivered document counts for one worker"""
    individual_process_id: str
    person_id: str
    person_name: str
    pending: int = 0
    under_review: int = 0
    approved: int = 0
    rejected: int = 0
    total: int = 0
