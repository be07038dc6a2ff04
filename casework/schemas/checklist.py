"""
Requirements checklist Pydantic schemas
"""
from datetime import date, datetime
from typing import Any, List, Optional
from pydantic import BaseModel, Field
from casework.models.enums import (
    ChecklistItemType,
    CompletionStatus,
    DeliveredDocumentStatus,
    EntityType,
    ResponsibleParty,
    ValidityStatus,
    ValidityType,
    WorkflowType,
)


class ValidityCheckResult(BaseModel):
    """Outcome of a document validity rule"""
    status: ValidityStatus
    message_key: str = Field(..., description="Translation key, e.g. validity.expiringSoon")
    days_value: Optional[int] = Field(None, description="Days remaining, or days past the limit when expired")


class InfoFieldStatus(BaseModel):
    """Info field required by the checklist and its current value"""
    entity_type: EntityType
    field_path: str
    label: str
    label_en: Optional[str] = None
    field_type: str = "text"
    current_value: Any = None
    is_filled: bool


class ConditionStatus(BaseModel):
    name: str
    is_fulfilled: bool
    expires_at: Optional[date] = None


class DeliveredDocumentSummary(BaseModel):
    id: str
    status: DeliveredDocumentStatus
    filename: str
    uploaded_at: datetime
    version: int


class DocumentRequirementStatus(BaseModel):
    """Document side of a checklist item"""
    document_type_id: str
    document_type_name: str
    document_type_code: Optional[str] = None
    workflow_type: WorkflowType
    validity_type: Optional[ValidityType] = None
    validity_days: Optional[int] = None
    validity_check: Optional[ValidityCheckResult] = None
    delivered_document: Optional[DeliveredDocumentSummary] = None
    conditions: List[ConditionStatus] = Field(default_factory=list)


class LinkedDocumentType(BaseModel):
    document_type_id: str
    name: str


class ChecklistItem(BaseModel):
    """One requirement of an individual process"""
    type: ChecklistItemType
    label: str
    sort_order: int
    responsible_party: ResponsibleParty
    is_required: bool
    completion_status: CompletionStatus
    document: Optional[DocumentRequirementStatus] = None
    info_fields: Optional[List[InfoFieldStatus]] = None
    linked_document_type: Optional[LinkedDocumentType] = None


class ChecklistSummary(BaseModel):
    total: int = 0
    completed: int = 0
    partial: int = 0
    pending: int = 0


class ChecklistResponse(BaseModel):
    """Schema for the full requirements checklist of an individual process"""
    individual_process_id: Optional[str] = None
    items: List[ChecklistItem] = Field(default_factory=list)
    summary: ChecklistSummary = Field(default_factory=ChecklistSummary)
