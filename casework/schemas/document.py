"""
Delivered document Pydantic schemas
"""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, model_validator
from casework.models.enums import DeliveredDocumentStatus


class DocumentUploadResponse(BaseModel):
    """Schema for delivered document response"""
    id: str = Field(..., description="DeliveredDocument UUID")
    individual_process_id: str
    document_type_id: str
    filename: str
    sha256: Optional[str] = Field(None, description="SHA256 hash of file content")
    mime_type: str
    size_bytes: int
    status: DeliveredDocumentStatus
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    uploaded_by: Optional[str] = None
    uploaded_at: datetime
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    version: int
    is_latest: bool

    class Config:
        from_attributes = True


class DocumentReview(BaseModel):
    """Schema for an admin reviewing a delivered document"""
    status: DeliveredDocumentStatus
    rejection_reason: Optional[str] = None

    @model_validator(mode="after")
    def validate_review(self):
        if self.status not in (DeliveredDocumentStatus.APPROVED, DeliveredDocumentStatus.REJECTED):
            raise ValueError("Review status must be approved or rejected")
        if self.status == DeliveredDocumentStatus.REJECTED and not (self.rejection_reason or "").strip():
            raise ValueError("Rejection reason is required")
        return self


class ConditionUpdate(BaseModel):
    """Fields left out of the body keep their stored value"""
    is_fulfilled: bool
    expires_at: Optional[date] = None
    notes: Optional[str] = None


class DeliveredConditionResponse(BaseModel):
    id: str
    document_delivered_id: str
    document_type_condition_id: str
    is_fulfilled: bool
    fulfilled_at: Optional[datetime] = None
    fulfilled_by: Optional[str] = None
    expires_at: Optional[date] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True
