"""
Government submission Pydantic schemas
"""
from typing import Optional
from pydantic import BaseModel, Field
from casework.models.enums import GovernmentSubmissionStatus


class GovernmentStatusResult(BaseModel):
    """Submission stage derived from the protocol fields"""
    status: GovernmentSubmissionStatus
    progress: float = Field(..., ge=0.0, le=100.0, description="Submission progress percentage")
    label: str = Field(..., description="Translation key for the stage")
    color: str = Field(..., description="Badge color: gray, yellow, blue or green")


class GovernmentStatusResponse(GovernmentStatusResult):
    """Schema for GET /individual-processes/{id}/government-status"""
    individual_process_id: str
    fields_completion: int = Field(..., ge=0, le=100, description="Percentage of protocol fields filled")
    next_action: Optional[str] = Field(None, description="Translation key of the next expected action")
