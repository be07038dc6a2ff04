"""
Main process Pydantic schemas
"""
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from casework.models.enums import IndividualProcessStatus, MainProcessStatus


class MainProcessCreate(BaseModel):
    """Schema for an admin opening a main process directly"""
    company_id: str
    contact_person_id: Optional[str] = None
    process_type_id: Optional[str] = None
    workplace_city: Optional[str] = None
    consulate: Optional[str] = None
    is_urgent: bool = False
    request_date: Optional[date] = None
    notes: Optional[str] = None


class MainProcessStatusUpdate(BaseModel):
    status: MainProcessStatus


class MainProcessResponse(BaseModel):
    """Schema for main process response"""
    id: str = Field(..., description="MainProcess UUID")
    reference_number: str = Field(..., description="e.g. PR-2025-0001")
    company_id: Optional[str] = None
    contact_person_id: Optional[str] = None
    process_type_id: Optional[str] = None
    workplace_city: Optional[str] = None
    consulate: Optional[str] = None
    is_urgent: bool
    request_date: Optional[date] = None
    notes: Optional[str] = None
    status: MainProcessStatus
    completed_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class StatusBreakdown(BaseModel):
    """Count of individual processes in one status"""
    status: IndividualProcessStatus
    label: str
    label_en: Optional[str] = None
    count: int


class CalculatedStatus(BaseModel):
    """Status of a main process calculated from its individual processes"""
    display_text: str
    display_text_en: str
    breakdown: List[StatusBreakdown]
    total_processes: int
    has_multiple_statuses: bool
    most_common_status: Optional[IndividualProcessStatus] = None


class MainProcessDetailResponse(MainProcessResponse):
    calculated_status: CalculatedStatus
