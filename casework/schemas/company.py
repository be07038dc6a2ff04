"""
Company Pydantic schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class CompanyCreate(BaseModel):
    """Schema for creating a new company"""
    name: str = Field(..., min_length=1, max_length=255, description="Company legal name")
    tax_id: Optional[str] = Field(None, description="CNPJ")
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    notes: Optional[str] = None


class CompanyUpdate(BaseModel):
    """Schema for partial company updates; only supplied fields change"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    tax_id: Optional[str] = None
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    is_active: Optional[bool] = None
    notes: Optional[str] = None


class CompanyResponse(BaseModel):
    """Schema for company response"""
    id: str = Field(..., description="Company UUID")
    name: str
    tax_id: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    is_active: bool
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
