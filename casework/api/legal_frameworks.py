"""
Legal framework API endpoints.

A legal framework (e.g. a resolution article) defines which documents and
which standalone data fields an individual process must provide.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from casework.core.database import get_db
from casework.core.security import get_current_user, require_admin
from casework.models.document_type import DocumentType, DocumentTypeLegalFramework
from casework.models.legal_framework import LegalFramework, LegalFrameworkInfoRequirement, ProcessType
from casework.models.user import UserProfile
from casework.schemas.catalog import (
    LegalFrameworkCreate,
    LegalFrameworkResponse,
    DocumentRequirementCreate,
    DocumentRequirementResponse,
    InfoRequirementCreate,
    InfoRequirementResponse,
)
from casework.utils.lookups import get_or_404

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=LegalFrameworkResponse, status_code=201)
async def create_legal_framework(
    framework_data: LegalFrameworkCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Raises:
        HTTPException 404: If the process type does not exist
    """
    if framework_data.process_type_id:
        await get_or_404(db, ProcessType, framework_data.process_type_id, "Process type")

    new_framework = LegalFramework(**framework_data.model_dump())

    db.add(new_framework)
    await db.flush()
    await db.refresh(new_framework)

    return new_framework


@router.get("", response_model=List[LegalFrameworkResponse])
async def list_legal_frameworks(
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(select(LegalFramework).order_by(LegalFramework.name))
    return result.scalars().all()


@router.post("/{framework_id}/documents", response_model=DocumentRequirementResponse, status_code=201)
async def add_document_requirement(
    framework_id: str,
    requirement_data: DocumentRequirementCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Associate a document type with a legal framework.

    Raises:
        HTTPException 404: If framework or document type not found
        HTTPException 409: If the document type is already associated
    """
    await get_or_404(db, LegalFramework, framework_id, "Legal framework")
    await get_or_404(db, DocumentType, requirement_data.document_type_id, "Document type")

    result = await db.execute(
        select(DocumentTypeLegalFramework).where(
            DocumentTypeLegalFramework.legal_framework_id == framework_id,
            DocumentTypeLegalFramework.document_type_id == requirement_data.document_type_id
        )
    )
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=409,
            detail=f"Document type {requirement_data.document_type_id} is already required by this legal framework"
        )

    association = DocumentTypeLegalFramework(
        legal_framework_id=framework_id,
        **requirement_data.model_dump()
    )

    db.add(association)
    await db.flush()
    await db.refresh(association)

    logger.info("Document type %s added to legal framework %s", association.document_type_id, framework_id)
    return association


@router.get("/{framework_id}/documents", response_model=List[DocumentRequirementResponse])
async def list_document_requirements(
    framework_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await get_or_404(db, LegalFramework, framework_id, "Legal framework")

    result = await db.execute(
        select(DocumentTypeLegalFramework)
        .where(DocumentTypeLegalFramework.legal_framework_id == framework_id)
        .order_by(DocumentTypeLegalFramework.sort_order)
    )
    return result.scalars().all()


@router.post("/{framework_id}/info-requirements", response_model=InfoRequirementResponse, status_code=201)
async def add_info_requirement(
    framework_id: str,
    requirement_data: InfoRequirementCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Require a data field that is not tied to any document"""
    await get_or_404(db, LegalFramework, framework_id, "Legal framework")

    requirement = LegalFrameworkInfoRequirement(
        legal_framework_id=framework_id,
        **requirement_data.model_dump()
    )

    db.add(requirement)
    await db.flush()
    await db.refresh(requirement)

    return requirement


@router.get("/{framework_id}/info-requirements", response_model=List[InfoRequirementResponse])
async def list_info_requirements(
    framework_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await get_or_404(db, LegalFramework, framework_id, "Legal framework")

    result = await db.execute(
        select(LegalFrameworkInfoRequirement)
        .where(LegalFrameworkInfoRequirement.legal_framework_id == framework_id)
        .order_by(LegalFrameworkInfoRequirement.sort_order)
    )
    return result.scalars().all()
