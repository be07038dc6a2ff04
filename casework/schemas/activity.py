"""
Activity log Pydantic schemas
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ActivityUser(BaseModel):
    id: str
    full_name: str
    email: str

    class Config:
        from_attributes = True


class ActivityLogResponse(BaseModel):
    """Schema for one activity entry"""
    id: str = Field(..., description="ActivityLog UUID")
    user_id: str
    action: str = Field(..., description="e.g. approved, status_changed, uploaded")
    entity_type: str
    entity_id: str
    details: Optional[Dict[str, Any]] = None
    created_at: datetime
    user: Optional[ActivityUser] = None

    class Config:
        from_attributes = True


class ActivityLogPage(BaseModel):
    logs: List[ActivityLogResponse]
    total: int
    has_more: bool
