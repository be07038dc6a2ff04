"""
Individual process Pydantic schemas
"""
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from casework.models.enums import IndividualProcessStatus


class IndividualProcessCreate(BaseModel):
    """Schema for adding a worker to a main process"""
    main_process_id: str
    person_id: str
    passport_id: Optional[str] = None
    company_applicant_id: Optional[str] = None
    legal_framework_id: Optional[str] = Field(None, description="Seeds the document checklist when set")
    cbo_code: Optional[str] = None
    deadline_date: Optional[date] = None


class IndividualProcessUpdate(BaseModel):
    """Schema for partial updates, including the government protocol fields"""
    passport_id: Optional[str] = None
    company_applicant_id: Optional[str] = None
    legal_framework_id: Optional[str] = None
    cbo_code: Optional[str] = None
    mre_office_number: Optional[str] = None
    dou_number: Optional[str] = None
    dou_section: Optional[str] = None
    dou_page: Optional[str] = None
    dou_date: Optional[date] = None
    protocol_number: Optional[str] = None
    rnm_number: Optional[str] = None
    rnm_deadline: Optional[date] = None
    appointment_datetime: Optional[datetime] = None
    deadline_date: Optional[date] = None
    is_active: Optional[bool] = None


class StatusChange(BaseModel):
    status: IndividualProcessStatus
    notes: Optional[str] = None


class IndividualProcessResponse(BaseModel):
    """Schema for individual process response"""
    id: str = Field(..., description="IndividualProcess UUID")
    main_process_id: str
    person_id: str
    passport_id: Optional[str] = None
    company_applicant_id: Optional[str] = None
    legal_framework_id: Optional[str] = None
    cbo_code: Optional[str] = None
    status: IndividualProcessStatus
    mre_office_number: Optional[str] = None
    dou_number: Optional[str] = None
    dou_section: Optional[str] = None
    dou_page: Optional[str] = None
    dou_date: Optional[date] = None
    protocol_number: Optional[str] = None
    rnm_number: Optional[str] = None
    rnm_deadline: Optional[date] = None
    appointment_datetime: Optional[datetime] = None
    deadline_date: Optional[date] = None
    is_active: bool
    completed_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ProcessHistoryResponse(BaseModel):
    id: str
    individual_process_id: str
    previous_status: Optional[IndividualProcessStatus] = None
    new_status: IndividualProcessStatus
    changed_by: str
    changed_at: datetime
    notes: Optional[str] = None
    extra: Optional[Dict[str, Any]] = None

    class Config:
        from_attributes = True


class AllowedStatusesResponse(BaseModel):
    current_status: IndividualProcessStatus
    allowed: List[IndividualProcessStatus]
