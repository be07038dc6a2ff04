"""
User profile Pydantic schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, model_validator
from casework.models.enums import UserRole


class UserCreate(BaseModel):
    """Schema for creating a user profile"""
    email: EmailStr = Field(..., description="Login email")
    full_name: str = Field(..., min_length=1, max_length=255)
    role: UserRole
    company_id: Optional[str] = Field(None, description="Required for client users")
    phone_number: Optional[str] = None

    @model_validator(mode="after")
    def validate_company(self):
        if self.role == UserRole.CLIENT and not self.company_id:
            raise ValueError("Client users must be assigned to a company")
        return self


class UserResponse(BaseModel):
    """Schema for user profile response"""
    id: str = Field(..., description="UserProfile UUID")
    email: str
    full_name: str
    role: UserRole
    company_id: Optional[str] = None
    phone_number: Optional[str] = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
