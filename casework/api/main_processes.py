"""
Main process API endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from casework.core.database import get_db
from casework.core.security import company_scope, get_current_user, require_admin, require_company_access
from casework.models.company import Company
from casework.models.enums import MainProcessStatus
from casework.models.process import IndividualProcess, MainProcess
from casework.models.user import UserProfile
from casework.schemas.main_process import (
    MainProcessCreate,
    MainProcessStatusUpdate,
    MainProcessResponse,
    MainProcessDetailResponse,
)
from casework.services.process_service import change_main_status, next_reference_number
from casework.services.status_calculation import calculate_main_process_status
from casework.utils.lookups import get_or_404

router = APIRouter()


@router.post("", response_model=MainProcessResponse, status_code=201)
async def create_main_process(
    process_data: MainProcessCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Open a main process directly, without a client request.

    Raises:
        HTTPException 404: If company not found
    """
    await get_or_404(db, Company, process_data.company_id)

    new_process = MainProcess(
        reference_number=await next_reference_number(db),
        status=MainProcessStatus.DRAFT,
        **process_data.model_dump()
    )

    db.add(new_process)
    await db.flush()
    await db.refresh(new_process)

    return new_process


@router.get("", response_model=List[MainProcessResponse])
async def list_main_processes(
    status: Optional[MainProcessStatus] = None,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List main processes, newest first. Clients only see their company's."""
    query = select(MainProcess).order_by(MainProcess.created_at.desc())

    scope = company_scope(user)
    if scope is not None:
        query = query.where(MainProcess.company_id == scope)
    if status is not None:
        query = query.where(MainProcess.status == status)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{main_process_id}", response_model=MainProcessDetailResponse)
async def get_main_process(
    main_process_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Main process with its status calculated from the individual processes.

    Raises:
        HTTPException 403: If a client asks for another company's process
        HTTPException 404: If main process not found
    """
    main_process = await get_or_404(db, MainProcess, main_process_id, "Main process")
    require_company_access(user, main_process.company_id)

    result = await db.execute(
        select(IndividualProcess.status).where(
            IndividualProcess.main_process_id == main_process_id,
            IndividualProcess.is_active == True
        )
    )
    calculated_status = calculate_main_process_status(result.scalars().all())

    response = MainProcessResponse.model_validate(main_process)
    return MainProcessDetailResponse(**response.model_dump(), calculated_status=calculated_status)


@router.patch("/{main_process_id}/status", response_model=MainProcessResponse)
async def update_main_process_status(
    main_process_id: str,
    status_data: MainProcessStatusUpdate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Raises:
        HTTPException 400: If the transition is not allowed
        HTTPException 404: If main process not found
    """
    main_process = await get_or_404(db, MainProcess, main_process_id, "Main process")
    main_process = await change_main_status(db, main_process, status_data.status, admin)
    await db.refresh(main_process)
    return main_process
