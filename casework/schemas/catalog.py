"""
Process type, legal framework and document type Pydantic schemas
"""
from typing import Optional
from pydantic import BaseModel, Field, model_validator
from casework.models.enums import EntityType, ResponsibleParty, ValidityType, WorkflowType


class ProcessTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    estimated_days: Optional[int] = Field(None, ge=0)
    sort_order: int = 0


class ProcessTypeResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    estimated_days: Optional[int] = None
    is_active: bool
    sort_order: int

    class Config:
        from_attributes = True


class LegalFrameworkCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    process_type_id: Optional[str] = None
    description: Optional[str] = None


class LegalFrameworkResponse(BaseModel):
    id: str
    name: str
    process_type_id: Optional[str] = None
    description: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


class DocumentTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    code: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None


class DocumentTypeResponse(BaseModel):
    id: str
    name: str
    code: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


class DocumentRequirementCreate(BaseModel):
    """Schema for associating a document type with a legal framework"""
    document_type_id: str
    is_required: bool = True
    responsible_party: Optional[ResponsibleParty] = None
    workflow_type: Optional[WorkflowType] = None
    validity_type: Optional[ValidityType] = None
    validity_days: Optional[int] = Field(None, gt=0, description="Days for the validity rule")
    sort_order: Optional[int] = None
    description: Optional[str] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_validity_rule(self):
        if self.validity_type and not self.validity_days:
            raise ValueError("validity_days is required when validity_type is set")
        return self


class DocumentRequirementResponse(BaseModel):
    id: str
    document_type_id: str
    legal_framework_id: str
    is_required: bool
    responsible_party: Optional[ResponsibleParty] = None
    workflow_type: Optional[WorkflowType] = None
    validity_type: Optional[ValidityType] = None
    validity_days: Optional[int] = None
    sort_order: Optional[int] = None
    description: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class InfoRequirementCreate(BaseModel):
    """Schema for a standalone info requirement of a legal framework"""
    entity_type: EntityType
    field_path: str = Field(..., min_length=1, description="Column name on the entity, e.g. mother_name")
    label: str = Field(..., min_length=1)
    label_en: Optional[str] = None
    field_type: str = "text"
    responsible_party: ResponsibleParty = ResponsibleParty.CLIENT
    is_required: bool = True
    sort_order: int = 0


class InfoRequirementResponse(BaseModel):
    id: str
    legal_framework_id: str
    entity_type: EntityType
    field_path: str
    label: str
    label_en: Optional[str] = None
    field_type: str
    responsible_party: ResponsibleParty
    is_required: bool
    sort_order: int
    is_active: bool

    class Config:
        from_attributes = True


class FieldMappingCreate(BaseModel):
    """Schema for an info field attached to a document type"""
    entity_type: EntityType
    field_path: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    label_en: Optional[str] = None
    field_type: str = "text"
    sort_order: int = 0


class FieldMappingResponse(BaseModel):
    id: str
    document_type_id: str
    entity_type: EntityType
    field_path: str
    label: str
    label_en: Optional[str] = None
    field_type: str
    sort_order: int
    is_active: bool

    class Config:
        from_attributes = True


class ConditionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    has_expiration: bool = False
    sort_order: int = 0


class ConditionResponse(BaseModel):
    id: str
    document_type_id: str
    name: str
    description: Optional[str] = None
    has_expiration: bool
    sort_order: int
    is_active: bool

    class Config:
        from_attributes = True
