"""Delivered document review and condition API endpoints."""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from casework.core.database import get_db
from casework.core.security import get_current_user, require_admin
from casework.models.delivered_document import DeliveredDocument, DeliveredDocumentCondition
from casework.models.user import UserProfile
from casework.schemas.document import (
    DocumentUploadResponse,
    DocumentReview,
    ConditionUpdate,
    DeliveredConditionResponse,
)
from casework.services.document_service import review_document, update_condition
from casework.api.individual_processes import get_accessible_process
from casework.utils.lookups import get_or_404

router = APIRouter()


async def get_accessible_document(db: AsyncSession, document_id: str, user: UserProfile) -> DeliveredDocument:
    document = await get_or_404(db, DeliveredDocument, document_id, "Document")
    await get_accessible_process(db, document.individual_process_id, user)
    return document


@router.get("/{document_id}", response_model=DocumentUploadResponse)
async def get_document(
    document_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Raises:
        HTTPException 403: If a client asks for another company's document
        HTTPException 404: If document not found
    """
    return await get_accessible_document(db, document_id, user)


@router.post("/{document_id}/review", response_model=DocumentUploadResponse)
async def review(
    document_id: str,
    review_data: DocumentReview,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Approve or reject an uploaded document.

    Args:
        document_id: DeliveredDocument UUID
        review_data: approved, or rejected with a reason
        admin: Reviewing administrator
        db: Database session

    Returns:
        The reviewed document

    Raises:
        HTTPException 400: If nothing has been uploaded yet
        HTTPException 404: If document not found
    """
    document = await get_or_404(db, DeliveredDocument, document_id, "Document")
    return await review_document(db, document, review_data, admin)


@router.get("/{document_id}/conditions", response_model=List[DeliveredConditionResponse])
async def list_document_conditions(
    document_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await get_accessible_document(db, document_id, user)

    result = await db.execute(
        select(DeliveredDocumentCondition).where(
            DeliveredDocumentCondition.document_delivered_id == document_id
        )
    )
    return result.scalars().all()


@router.patch("/{document_id}/conditions/{condition_id}", response_model=DeliveredConditionResponse)
async def set_condition(
    document_id: str,
    condition_id: str,
    update: ConditionUpdate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Mark a condition of a delivered document as fulfilled or not.

    Raises:
        HTTPException 404: If document or condition not found
    """
    document = await get_or_404(db, DeliveredDocument, document_id, "Document")
    return await update_condition(db, document, condition_id, update, admin)
