"""Requirements checklist evaluation.

Combines the document requirements of a legal framework (document type
associations, with their info-field mappings, conditions and validity rules)
with its standalone info requirements, and decides for each one whether it
is completed, partial or pending.

Everything here works on records that were already loaded; see
checklist_service.get_requirements_checklist for the database side.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import inspect as sa_inspect

from casework.models.delivered_document import DeliveredDocument
from casework.models.document_type import DocumentType, DocumentTypeFieldMapping, DocumentTypeLegalFramework
from casework.models.enums import (
    ChecklistItemType,
    CompletionStatus,
    DeliveredDocumentStatus,
    EntityType,
    ResponsibleParty,
    WorkflowType,
)
from casework.models.legal_framework import LegalFrameworkInfoRequirement
from casework.schemas.checklist import (
    ChecklistItem,
    ChecklistResponse,
    ChecklistSummary,
    ConditionStatus,
    DeliveredDocumentSummary,
    DocumentRequirementStatus,
    InfoFieldStatus,
    LinkedDocumentType,
    ValidityCheckResult,
)
from casework.services.document_validity import check_document_validity, is_validity_ok

DEFAULT_SORT_ORDER = 999

NOT_DELIVERED_STATUSES = (DeliveredDocumentStatus.NOT_STARTED, DeliveredDocumentStatus.PENDING_UPLOAD)


def get_field_value(entity_type: str, field_path: str, person, process, passport, company) -> Any:
    """Read a field from the entity an info requirement points at.

    Only mapped columns can be read. Returns None for unknown entity types,
    unknown fields and absent entities (no passport, no company).
    """
    entities = {
        EntityType.PERSON: person,
        EntityType.INDIVIDUAL_PROCESS: process,
        EntityType.PASSPORT: passport,
        EntityType.COMPANY: company,
    }
    try:
        entity = entities.get(EntityType(entity_type))
    except ValueError:
        return None
    if entity is None:
        return None
    if field_path not in sa_inspect(entity).mapper.column_attrs:
        return None
    return getattr(entity, field_path, None)


def is_filled(value: Any) -> bool:
    return value is not None and value != ""


def _info_field(mapping, person, process, passport, company) -> InfoFieldStatus:
    current_value = get_field_value(mapping.entity_type, mapping.field_path, person, process, passport, company)
    return InfoFieldStatus(
        entity_type=mapping.entity_type,
        field_path=mapping.field_path,
        label=mapping.label,
        label_en=mapping.label_en,
        field_type=mapping.field_type or "text",
        current_value=current_value,
        is_filled=is_filled(current_value),
    )


def evaluate_completion(
    info_fields: List[InfoFieldStatus],
    has_document: bool,
    all_conditions_met: bool,
    validity_ok: bool,
) -> CompletionStatus:
    """Completion of a document requirement.

    Args:
        info_fields: Info fields mapped to the document type
        has_document: A file was actually delivered
        all_conditions_met: Every condition of the delivered document is fulfilled
        validity_ok: The validity rule passes (or there is none)
    """
    has_info_fields = len(info_fields) > 0
    all_info_filled = all(field.is_filled for field in info_fields)

    if has_info_fields and has_document:
        if all_info_filled and all_conditions_met and validity_ok:
            return CompletionStatus.COMPLETED
        return CompletionStatus.PARTIAL
    if has_document and all_conditions_met and validity_ok and not has_info_fields:
        return CompletionStatus.COMPLETED
    if has_info_fields and all_info_filled and not has_document:
        return CompletionStatus.PARTIAL
    if has_document or any(field.is_filled for field in info_fields):
        return CompletionStatus.PARTIAL
    return CompletionStatus.PENDING


def build_document_item(
    association: DocumentTypeLegalFramework,
    document_type: DocumentType,
    mappings: List[DocumentTypeFieldMapping],
    latest_document: Optional[DeliveredDocument],
    conditions: List[ConditionStatus],
    person,
    process,
    passport,
    company,
    today: Optional[date] = None,
) -> ChecklistItem:
    """Checklist item for one document type required by the legal framework"""
    active_mappings = sorted((m for m in mappings if m.is_active), key=lambda m: m.sort_order)
    info_fields = [_info_field(m, person, process, passport, company) for m in active_mappings]

    validity_check: Optional[ValidityCheckResult] = None
    if association.validity_type and association.validity_days and latest_document is not None:
        validity_check = check_document_validity(
            association.validity_type,
            association.validity_days,
            latest_document.issue_date,
            latest_document.expiry_date,
            today=today,
        )

    has_document = latest_document is not None and latest_document.status not in NOT_DELIVERED_STATUSES
    all_conditions_met = len(conditions) == 0 or all(c.is_fulfilled for c in conditions)

    completion = evaluate_completion(info_fields, has_document, all_conditions_met, is_validity_ok(validity_check))

    delivered = None
    if latest_document is not None:
        delivered = DeliveredDocumentSummary(
            id=latest_document.id,
            status=latest_document.status,
            filename=latest_document.filename or "",
            uploaded_at=latest_document.uploaded_at,
            version=latest_document.version,
        )

    return ChecklistItem(
        type=ChecklistItemType.DOCUMENT_WITH_INFO if info_fields else ChecklistItemType.DOCUMENT,
        label=document_type.name,
        sort_order=association.sort_order if association.sort_order is not None else DEFAULT_SORT_ORDER,
        responsible_party=association.responsible_party or ResponsibleParty.CLIENT,
        is_required=association.is_required,
        completion_status=completion,
        document=DocumentRequirementStatus(
            document_type_id=document_type.id,
            document_type_name=document_type.name,
            document_type_code=document_type.code,
            workflow_type=association.workflow_type or WorkflowType.UPLOAD,
            validity_type=association.validity_type,
            validity_days=association.validity_days,
            validity_check=validity_check,
            delivered_document=delivered,
            conditions=conditions,
        ),
        info_fields=info_fields or None,
    )


def build_info_item(
    requirement: LegalFrameworkInfoRequirement,
    linked_document_type: Optional[DocumentType],
    person,
    process,
    passport,
    company,
) -> ChecklistItem:
    """Checklist item for a standalone info requirement"""
    field = _info_field(requirement, person, process, passport, company)
    linked = None
    if linked_document_type is not None:
        linked = LinkedDocumentType(document_type_id=linked_document_type.id, name=linked_document_type.name)

    return ChecklistItem(
        type=ChecklistItemType.INFO,
        label=requirement.label,
        sort_order=requirement.sort_order or 0,
        responsible_party=requirement.responsible_party or ResponsibleParty.CLIENT,
        is_required=requirement.is_required,
        completion_status=CompletionStatus.COMPLETED if field.is_filled else CompletionStatus.PENDING,
        info_fields=[field],
        linked_document_type=linked,
    )


def summarize(items: List[ChecklistItem]) -> ChecklistSummary:
    return ChecklistSummary(
        total=len(items),
        completed=sum(1 for i in items if i.completion_status == CompletionStatus.COMPLETED),
        partial=sum(1 for i in items if i.completion_status == CompletionStatus.PARTIAL),
        pending=sum(1 for i in items if i.completion_status == CompletionStatus.PENDING),
    )


def build_checklist(
    process,
    person,
    passport,
    company,
    associations: List[DocumentTypeLegalFramework],
    document_types: Dict[str, DocumentType],
    field_mappings: List[DocumentTypeFieldMapping],
    info_requirements: List[LegalFrameworkInfoRequirement],
    delivered_documents: List[DeliveredDocument],
    conditions: Dict[str, List[ConditionStatus]],
    today: Optional[date] = None,
) -> ChecklistResponse:
    """Build the requirements checklist of an individual process.

    Args:
        process: IndividualProcess being evaluated
        person, passport, company: Records info fields are read from
            (passport and company may be None)
        associations: Document type associations of the process's legal framework
        document_types: Document types by id (associated and linked ones)
        field_mappings: Field mappings of the associated document types, plus
            any mapping sharing an entity/field with an info requirement
        info_requirements: Standalone info requirements of the legal framework
        delivered_documents: Delivered documents of the process (all versions)
        conditions: Condition statuses by delivered document id
        today: Reference date for validity rules

    Returns:
        ChecklistResponse with items sorted by sort order and a summary
    """
    if not process.legal_framework_id:
        return ChecklistResponse(individual_process_id=process.id)

    latest_by_type: Dict[str, DeliveredDocument] = {}
    for document in delivered_documents:
        if document.is_latest and document.document_type_id not in latest_by_type:
            latest_by_type[document.document_type_id] = document

    mappings_by_type: Dict[str, List[DocumentTypeFieldMapping]] = {}
    for mapping in field_mappings:
        mappings_by_type.setdefault(mapping.document_type_id, []).append(mapping)

    document_items = []
    for association in associations:
        document_type = document_types.get(association.document_type_id)
        if document_type is None or document_type.is_active is False:
            continue
        latest = latest_by_type.get(association.document_type_id)
        document_items.append(build_document_item(
            association,
            document_type,
            mappings_by_type.get(association.document_type_id, []),
            latest,
            conditions.get(latest.id, []) if latest is not None else [],
            person,
            process,
            passport,
            company,
            today=today,
        ))

    info_items = []
    for requirement in info_requirements:
        if not requirement.is_active:
            continue
        linked_mapping = next(
            (
                m for m in field_mappings
                if m.is_active
                and m.entity_type == requirement.entity_type
                and m.field_path == requirement.field_path
            ),
            None,
        )
        linked_type = document_types.get(linked_mapping.document_type_id) if linked_mapping else None
        info_items.append(build_info_item(requirement, linked_type, person, process, passport, company))

    items = sorted(document_items + info_items, key=lambda item: item.sort_order)
    return ChecklistResponse(
        individual_process_id=process.id,
        items=items,
        summary=summarize(items),
    )
