"""
Process type API endpoints
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from casework.core.database import get_db
from casework.core.security import get_current_user, require_admin
from casework.models.legal_framework import ProcessType
from casework.models.user import UserProfile
from casework.schemas.catalog import ProcessTypeCreate, ProcessTypeResponse

router = APIRouter()


@router.post("", response_model=ProcessTypeResponse, status_code=201)
async def create_process_type(
    process_type_data: ProcessTypeCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    new_process_type = ProcessType(**process_type_data.model_dump())

    db.add(new_process_type)
    await db.flush()
    await db.refresh(new_process_type)

    return new_process_type


@router.get("", response_model=List[ProcessTypeResponse])
async def list_process_types(
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Active process types in display order"""
    result = await db.execute(
        select(ProcessType)
        .where(ProcessType.is_active == True)
        .order_by(ProcessType.sort_order, ProcessType.name)
    )
    return result.scalars().all()
