"""
Person and Passport Pydantic schemas
"""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, model_validator


class PersonCreate(BaseModel):
    """Schema for creating a person"""
    full_name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    cpf: Optional[str] = Field(None, description="Brazilian taxpayer id")
    birth_date: Optional[date] = None
    birth_city: Optional[str] = None
    nationality: Optional[str] = None
    marital_status: Optional[str] = None
    profession: Optional[str] = None
    mother_name: Optional[str] = None
    father_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    current_city: Optional[str] = None
    notes: Optional[str] = None


class PersonUpdate(BaseModel):
    """Schema for partial person updates"""
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    cpf: Optional[str] = None
    birth_date: Optional[date] = None
    birth_city: Optional[str] = None
    nationality: Optional[str] = None
    marital_status: Optional[str] = None
    profession: Optional[str] = None
    mother_name: Optional[str] = None
    father_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    current_city: Optional[str] = None
    notes: Optional[str] = None


class PersonResponse(BaseModel):
    """Schema for person response"""
    id: str = Field(..., description="Person UUID")
    full_name: str
    email: Optional[str] = None
    cpf: Optional[str] = None
    birth_date: Optional[date] = None
    birth_city: Optional[str] = None
    nationality: Optional[str] = None
    marital_status: Optional[str] = None
    profession: Optional[str] = None
    mother_name: Optional[str] = None
    father_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    current_city: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class PassportCreate(BaseModel):
    """Schema for registering a passport for a person"""
    passport_number: str = Field(..., min_length=1, max_length=50)
    issuing_country: Optional[str] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None

    @model_validator(mode="after")
    def validate_dates(self):
        if self.issue_date and self.expiry_date and self.expiry_date <= self.issue_date:
            raise ValueError("Expiry date must be after issue date")
        return self


class PassportResponse(BaseModel):
    """Schema for passport response"""
    id: str = Field(..., description="Passport UUID")
    person_id: str
    passport_number: str
    issuing_country: Optional[str] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    is_active: bool

    class Config:
        from_attributes = True
