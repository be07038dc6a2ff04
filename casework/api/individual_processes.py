"""
Individual process API endpoints.

An individual process tracks one person's visa application inside a main
process: its workflow status, government protocol fields, requirements
checklist and delivered documents.
"""
import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from casework.core.database import get_db
from casework.core.security import company_scope, get_current_user, require_admin, require_company_access
from casework.models.company import Company
from casework.models.delivered_document import DeliveredDocument
from casework.models.enums import IndividualProcessStatus
from casework.models.legal_framework import LegalFramework
from casework.models.person import Passport, Person
from casework.models.process import IndividualProcess, MainProcess, ProcessHistory
from casework.models.user import UserProfile
from casework.schemas.checklist import ChecklistResponse
from casework.schemas.document import DocumentUploadResponse
from casework.schemas.government import GovernmentStatusResponse
from casework.schemas.individual_process import (
    IndividualProcessCreate,
    IndividualProcessUpdate,
    IndividualProcessResponse,
    StatusChange,
    ProcessHistoryResponse,
    AllowedStatusesResponse,
)
from casework.services.checklist_service import get_requirements_checklist, seed_document_checklist
from casework.services.document_service import upload_document
from casework.services.government_status import (
    calculate_government_fields_completion,
    calculate_government_status,
    get_next_government_action,
)
from casework.services.process_service import change_individual_status, log_initial_status
from casework.services.status_rules import get_next_allowed_individual_statuses
from casework.utils.lookups import get_or_404

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_accessible_process(db: AsyncSession, process_id: str, user: UserProfile) -> IndividualProcess:
    """
    Load an individual process the caller may see.

    Raises:
        HTTPException 403: If a client asks for another company's process
        HTTPException 404: If process not found
    """
    process = await get_or_404(db, IndividualProcess, process_id, "Individual process")
    main_process = await db.get(MainProcess, process.main_process_id)
    require_company_access(user, main_process.company_id if main_process else None)
    return process


async def _validate_references(db: AsyncSession, person_id: Optional[str], data: dict) -> None:
    """404 for any referenced row that does not exist; 400 for a passport of someone else"""
    if data.get("passport_id"):
        passport = await get_or_404(db, Passport, data["passport_id"])
        if person_id and passport.person_id != person_id:
            raise HTTPException(
                status_code=400,
                detail=f"Passport {passport.id} does not belong to person {person_id}"
            )
    if data.get("legal_framework_id"):
        await get_or_404(db, LegalFramework, data["legal_framework_id"], "Legal framework")
    if data.get("company_applicant_id"):
        await get_or_404(db, Company, data["company_applicant_id"])


@router.post("", response_model=IndividualProcessResponse, status_code=201)
async def create_individual_process(
    process_data: IndividualProcessCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Create an individual process and seed its document checklist.

    When a legal framework is set, a not_started placeholder is created for
    every active document type the framework requires.

    Raises:
        HTTPException 400: If the passport belongs to another person
        HTTPException 404: If main process, person, passport, legal framework or company not found
    """
    await get_or_404(db, MainProcess, process_data.main_process_id, "Main process")
    await get_or_404(db, Person, process_data.person_id)
    await _validate_references(db, process_data.person_id, process_data.model_dump())

    new_process = IndividualProcess(
        status=IndividualProcessStatus.PENDING_DOCUMENTS,
        **process_data.model_dump()
    )

    db.add(new_process)
    await db.flush()
    await db.refresh(new_process)

    await log_initial_status(db, new_process, admin)
    await seed_document_checklist(db, new_process)

    logger.info("Individual process %s created for person %s", new_process.id, new_process.person_id)
    return new_process


@router.get("", response_model=List[IndividualProcessResponse])
async def list_individual_processes(
    main_process_id: Optional[str] = None,
    status: Optional[IndividualProcessStatus] = None,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List individual processes. Clients only see their company's processes."""
    query = (
        select(IndividualProcess)
        .join(MainProcess, MainProcess.id == IndividualProcess.main_process_id)
        .order_by(IndividualProcess.created_at.desc())
    )

    scope = company_scope(user)
    if scope is not None:
        query = query.where(MainProcess.company_id == scope)
    if main_process_id:
        query = query.where(IndividualProcess.main_process_id == main_process_id)
    if status is not None:
        query = query.where(IndividualProcess.status == status)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{process_id}", response_model=IndividualProcessResponse)
async def get_individual_process(
    process_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await get_accessible_process(db, process_id, user)


@router.patch("/{process_id}", response_model=IndividualProcessResponse)
async def update_individual_process(
    process_id: str,
    process_data: IndividualProcessUpdate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Update protocol fields, passport, legal framework or deadline.
    Only supplied fields change; a new legal framework seeds the missing
    checklist placeholders.

    Raises:
        HTTPException 400: If the passport belongs to another person
        HTTPException 404: If process or a referenced row not found
    """
    process = await get_or_404(db, IndividualProcess, process_id, "Individual process")
    changes = process_data.model_dump(exclude_unset=True)
    await _validate_references(db, process.person_id, changes)

    framework_changed = (
        "legal_framework_id" in changes and changes["legal_framework_id"] != process.legal_framework_id
    )
    for field, value in changes.items():
        setattr(process, field, value)

    await db.flush()
    if framework_changed:
        await seed_document_checklist(db, process)
    await db.refresh(process)
    return process


@router.post("/{process_id}/status", response_model=IndividualProcessResponse)
async def change_status(
    process_id: str,
    status_data: StatusChange,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Move the process to a new workflow status.

    Raises:
        HTTPException 400: If the transition is not allowed
        HTTPException 404: If process not found
    """
    process = await get_or_404(db, IndividualProcess, process_id, "Individual process")
    await change_individual_status(db, process, status_data.status, admin, status_data.notes)
    await db.refresh(process)
    return process


@router.get("/{process_id}/history", response_model=List[ProcessHistoryResponse])
async def get_status_history(
    process_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Status changes, oldest first"""
    await get_accessible_process(db, process_id, user)

    result = await db.execute(
        select(ProcessHistory)
        .where(ProcessHistory.individual_process_id == process_id)
        .order_by(ProcessHistory.changed_at)
    )
    return result.scalars().all()


@router.get("/{process_id}/allowed-statuses", response_model=AllowedStatusesResponse)
async def get_allowed_statuses(
    process_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    process = await get_accessible_process(db, process_id, user)
    return AllowedStatusesResponse(
        current_status=process.status,
        allowed=get_next_allowed_individual_statuses(process.status)
    )


@router.get("/{process_id}/checklist", response_model=ChecklistResponse)
async def get_checklist(
    process_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Requirements checklist: required documents (with their mapped data
    fields, conditions and validity) plus standalone data fields.

    Raises:
        HTTPException 403: If a client asks for another company's process
        HTTPException 404: If process not found
    """
    process = await get_accessible_process(db, process_id, user)
    return await get_requirements_checklist(db, process)


@router.get("/{process_id}/government-status", response_model=GovernmentStatusResponse)
async def get_government_status(
    process_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    process = await get_accessible_process(db, process_id, user)
    result = calculate_government_status(process)

    return GovernmentStatusResponse(
        individual_process_id=process.id,
        fields_completion=calculate_government_fields_completion(process),
        next_action=get_next_government_action(process),
        **result.model_dump()
    )


@router.post("/{process_id}/documents", response_model=DocumentUploadResponse, status_code=201)
async def upload_process_document(
    process_id: str,
    file: UploadFile = File(...),
    document_type_id: str = Form(...),
    issue_date: Optional[date] = Form(None),
    expiry_date: Optional[date] = Form(None),
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Upload a document for a process.

    Features:
    - SHA256 hash calculation for duplicate detection
    - File type validation (PDF, PNG, JPG only)
    - File size validation (max 10MB)
    - Fills the not_started placeholder, or adds a new version
    - File storage in /bucket/{process_id}/ directory

    Raises:
        HTTPException 400: If file type not allowed
        HTTPException 403: If a client uploads to another company's process
        HTTPException 404: If process or document type not found
        HTTPException 409: If duplicate file (same SHA256) already exists in this process
        HTTPException 413: If file size exceeds limit
    """
    process = await get_accessible_process(db, process_id, user)
    return await upload_document(
        db,
        process,
        document_type_id=document_type_id,
        file=file,
        uploaded_by=user,
        issue_date=issue_date,
        expiry_date=expiry_date
    )


@router.get("/{process_id}/documents", response_model=List[DocumentUploadResponse])
async def list_process_documents(
    process_id: str,
    document_type_id: Optional[str] = None,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delivered documents of a process, newest version first"""
    await get_accessible_process(db, process_id, user)

    query = (
        select(DeliveredDocument)
        .where(DeliveredDocument.individual_process_id == process_id)
        .order_by(DeliveredDocument.document_type_id, DeliveredDocument.version.desc())
    )
    if document_type_id:
        query = query.where(DeliveredDocument.document_type_id == document_type_id)

    result = await db.execute(query)
    return result.scalars().all()
