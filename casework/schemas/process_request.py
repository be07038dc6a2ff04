"""
Process request Pydantic schemas
"""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from casework.models.enums import RequestStatus


class ProcessRequestCreate(BaseModel):
    """Schema for a client submitting a process request"""
    contact_person_id: str = Field(..., description="Person UUID of the company contact")
    process_type_id: str = Field(..., description="ProcessType UUID")
    workplace_city: str = Field(..., min_length=1)
    consulate: Optional[str] = None
    is_urgent: bool = False
    request_date: date
    notes: Optional[str] = None


class ProcessRequestUpdate(BaseModel):
    """Schema for admin edits of a pending request; only supplied fields change"""
    contact_person_id: Optional[str] = None
    process_type_id: Optional[str] = None
    workplace_city: Optional[str] = Field(None, min_length=1)
    consulate: Optional[str] = None
    is_urgent: Optional[bool] = None
    request_date: Optional[date] = None
    notes: Optional[str] = None


class ProcessRequestReject(BaseModel):
    rejection_reason: str = Field(..., description="Reason shown to the client")

    @field_validator('rejection_reason')
    @classmethod
    def validate_reason(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('Rejection reason is required')
        return v.strip()


class ProcessRequestResponse(BaseModel):
    """Schema for process request response"""
    id: str = Field(..., description="ProcessRequest UUID")
    company_id: str
    contact_person_id: str
    process_type_id: str
    workplace_city: str
    consulate: Optional[str] = None
    is_urgent: bool
    request_date: date
    notes: Optional[str] = None
    status: RequestStatus
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    approved_main_process_id: Optional[str] = None
    created_by: str
    created_at: datetime

    class Config:
        from_attributes = True
