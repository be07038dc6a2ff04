"""Checklist management service."""

import logging
from datetime import date
from typing import Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from casework.models.company import Company
from casework.models.delivered_document import DeliveredDocument, DeliveredDocumentCondition
from casework.models.document_type import (
    DocumentType,
    DocumentTypeCondition,
    DocumentTypeFieldMapping,
    DocumentTypeLegalFramework,
)
from casework.models.enums import DeliveredDocumentStatus
from casework.models.legal_framework import LegalFrameworkInfoRequirement
from casework.models.person import Passport, Person
from casework.models.process import IndividualProcess, MainProcess
from casework.schemas.checklist import ChecklistResponse, ConditionStatus
from casework.services.requirements_checklist import build_checklist

logger = logging.getLogger(__name__)


async def resolve_company(db: AsyncSession, process: IndividualProcess) -> Optional[Company]:
    """Company of an individual process: the applicant company, else the main process's company"""
    if process.company_applicant_id:
        return await db.get(Company, process.company_applicant_id)
    main_process = await db.get(MainProcess, process.main_process_id)
    if main_process and main_process.company_id:
        return await db.get(Company, main_process.company_id)
    return None


async def seed_document_checklist(db: AsyncSession, process: IndividualProcess) -> List[DeliveredDocument]:
    """Create placeholder delivered documents for every document the legal framework requires.

    Document types that already have a latest record for the process are
    skipped, so this can run again after the legal framework changes.

    Args:
        db: Database session
        process: IndividualProcess with legal_framework_id set

    Returns:
        The placeholders that were created
    """
    if not process.legal_framework_id:
        return []

    result = await db.execute(
        select(DocumentTypeLegalFramework, DocumentType)
        .join(DocumentType, DocumentType.id == DocumentTypeLegalFramework.document_type_id)
        .where(
            DocumentTypeLegalFramework.legal_framework_id == process.legal_framework_id,
            DocumentType.is_active == True
        )
    )
    associations = result.all()

    result = await db.execute(
        select(DeliveredDocument.document_type_id).where(
            DeliveredDocument.individual_process_id == process.id,
            DeliveredDocument.is_latest == True
        )
    )
    existing_types = set(result.scalars().all())

    main_process = await db.get(MainProcess, process.main_process_id)
    company_id = process.company_applicant_id or (main_process.company_id if main_process else None)

    created = []
    for association, document_type in associations:
        if document_type.id in existing_types:
            continue
        placeholder = DeliveredDocument(
            individual_process_id=process.id,
            document_type_id=document_type.id,
            person_id=process.person_id,
            company_id=company_id,
            status=DeliveredDocumentStatus.NOT_STARTED,
            version=1,
            is_latest=True,
        )
        db.add(placeholder)
        created.append(placeholder)

    await db.flush()
    logger.info("Seeded %d checklist placeholders for individual process %s", len(created), process.id)
    return created


async def get_requirements_checklist(
    db: AsyncSession,
    process: IndividualProcess,
    today: Optional[date] = None
) -> ChecklistResponse:
    """Load everything the checklist needs and evaluate it.

    Args:
        db: Database session
        process: IndividualProcess to evaluate
        today: Reference date for validity rules

    Raises:
        HTTPException 404: If the process's person no longer exists
    """
    if not process.legal_framework_id:
        return ChecklistResponse(individual_process_id=process.id)

    person = await db.get(Person, process.person_id)
    if person is None:
        raise HTTPException(status_code=404, detail=f"Person with id {process.person_id} not found")

    passport = await db.get(Passport, process.passport_id) if process.passport_id else None
    company = await resolve_company(db, process)

    result = await db.execute(
        select(DocumentTypeLegalFramework).where(
            DocumentTypeLegalFramework.legal_framework_id == process.legal_framework_id
        )
    )
    associations = result.scalars().all()

    result = await db.execute(
        select(LegalFrameworkInfoRequirement).where(
            LegalFrameworkInfoRequirement.legal_framework_id == process.legal_framework_id
        )
    )
    info_requirements = result.scalars().all()

    # Mappings of the required document types, plus mappings that link an
    # info requirement's field to some document type
    document_type_ids = {a.document_type_id for a in associations}
    field_paths = {r.field_path for r in info_requirements}
    field_mappings: List[DocumentTypeFieldMapping] = []
    if document_type_ids or field_paths:
        result = await db.execute(
            select(DocumentTypeFieldMapping).where(
                or_(
                    DocumentTypeFieldMapping.document_type_id.in_(list(document_type_ids)),
                    DocumentTypeFieldMapping.field_path.in_(list(field_paths)),
                )
            )
        )
        field_mappings = result.scalars().all()

    all_type_ids = document_type_ids | {m.document_type_id for m in field_mappings}
    document_types: Dict[str, DocumentType] = {}
    if all_type_ids:
        result = await db.execute(select(DocumentType).where(DocumentType.id.in_(list(all_type_ids))))
        document_types = {t.id: t for t in result.scalars().all()}

    result = await db.execute(
        select(DeliveredDocument)
        .where(DeliveredDocument.individual_process_id == process.id)
        .order_by(DeliveredDocument.version.desc())
    )
    delivered_documents = result.scalars().all()

    conditions = await load_conditions(db, [d.id for d in delivered_documents if d.is_latest])

    return build_checklist(
        process,
        person,
        passport,
        company,
        associations=list(associations),
        document_types=document_types,
        field_mappings=list(field_mappings),
        info_requirements=list(info_requirements),
        delivered_documents=list(delivered_documents),
        conditions=conditions,
        today=today,
    )


async def load_conditions(db: AsyncSession, delivered_ids: List[str]) -> Dict[str, List[ConditionStatus]]:
    """Condition statuses of delivered documents, keyed by delivered document id"""
    if not delivered_ids:
        return {}

    result = await db.execute(
        select(DeliveredDocumentCondition, DocumentTypeCondition)
        .join(DocumentTypeCondition, DocumentTypeCondition.id == DeliveredDocumentCondition.document_type_condition_id)
        .where(DeliveredDocumentCondition.document_delivered_id.in_(delivered_ids))
        .order_by(DocumentTypeCondition.sort_order)
    )

    conditions: Dict[str, List[ConditionStatus]] = {}
    for delivered_condition, condition in result.all():
        conditions.setdefault(delivered_condition.document_delivered_id, []).append(
            ConditionStatus(
                name=condition.name,
                is_fulfilled=delivered_condition.is_fulfilled,
                expires_at=delivered_condition.expires_at,
            )
        )
    return conditions
