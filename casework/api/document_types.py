"""
Document type API endpoints: types, their conditions and field mappings
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from casework.core.database import get_db
from casework.core.security import get_current_user, require_admin
from casework.models.document_type import DocumentType, DocumentTypeCondition, DocumentTypeFieldMapping
from casework.models.user import UserProfile
from casework.schemas.catalog import (
    DocumentTypeCreate,
    DocumentTypeResponse,
    ConditionCreate,
    ConditionResponse,
    FieldMappingCreate,
    FieldMappingResponse,
)
from casework.utils.lookups import get_or_404

router = APIRouter()


@router.post("", response_model=DocumentTypeResponse, status_code=201)
async def create_document_type(
    document_type_data: DocumentTypeCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    new_document_type = DocumentType(**document_type_data.model_dump())

    db.add(new_document_type)
    await db.flush()
    await db.refresh(new_document_type)

    return new_document_type


@router.get("", response_model=List[DocumentTypeResponse])
async def list_document_types(
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(select(DocumentType).order_by(DocumentType.name))
    return result.scalars().all()


@router.post("/{document_type_id}/conditions", response_model=ConditionResponse, status_code=201)
async def create_condition(
    document_type_id: str,
    condition_data: ConditionCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Add a condition a delivered document of this type must meet
    (e.g. "Apostilled", "Sworn translation").

    Raises:
        HTTPException 404: If document type not found
    """
    await get_or_404(db, DocumentType, document_type_id, "Document type")

    condition = DocumentTypeCondition(document_type_id=document_type_id, **condition_data.model_dump())

    db.add(condition)
    await db.flush()
    await db.refresh(condition)

    return condition


@router.get("/{document_type_id}/conditions", response_model=List[ConditionResponse])
async def list_conditions(
    document_type_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await get_or_404(db, DocumentType, document_type_id, "Document type")

    result = await db.execute(
        select(DocumentTypeCondition)
        .where(DocumentTypeCondition.document_type_id == document_type_id)
        .order_by(DocumentTypeCondition.sort_order)
    )
    return result.scalars().all()


@router.post("/{document_type_id}/field-mappings", response_model=FieldMappingResponse, status_code=201)
async def create_field_mapping(
    document_type_id: str,
    mapping_data: FieldMappingCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Declare a data field the document type carries, e.g. the passport's
    expiry_date or the person's mother_name.

    Raises:
        HTTPException 404: If document type not found
    """
    await get_or_404(db, DocumentType, document_type_id, "Document type")

    mapping = DocumentTypeFieldMapping(document_type_id=document_type_id, **mapping_data.model_dump())

    db.add(mapping)
    await db.flush()
    await db.refresh(mapping)

    return mapping


@router.get("/{document_type_id}/field-mappings", response_model=List[FieldMappingResponse])
async def list_field_mappings(
    document_type_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await get_or_404(db, DocumentType, document_type_id, "Document type")

    result = await db.execute(
        select(DocumentTypeFieldMapping)
        .where(DocumentTypeFieldMapping.document_type_id == document_type_id)
        .order_by(DocumentTypeFieldMapping.sort_order)
    )
    return result.scalars().all()
