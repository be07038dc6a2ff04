"""
Process request API endpoints.

Clients submit requests for their company; an admin approves a request
(opening a main process) or rejects it with a reason.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from casework.core.database import get_db
from casework.core.security import (
    company_scope,
    get_current_user,
    require_admin,
    require_client,
    require_company_access,
)
from casework.models.enums import RequestStatus
from casework.models.legal_framework import ProcessType
from casework.models.person import Person
from casework.models.process_request import ProcessRequest
from casework.models.user import UserProfile
from casework.schemas.main_process import MainProcessResponse
from casework.schemas.process_request import (
    ProcessRequestCreate,
    ProcessRequestUpdate,
    ProcessRequestReject,
    ProcessRequestResponse,
)
from casework.services.process_service import approve_process_request, reject_process_request
from casework.utils.lookups import get_or_404

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ProcessRequestResponse, status_code=201)
async def create_process_request(
    request_data: ProcessRequestCreate,
    user: UserProfile = Depends(require_client),
    db: AsyncSession = Depends(get_db)
):
    """
    Submit a process request for the caller's company.

    Raises:
        HTTPException 403: If the caller is not a client with a company
        HTTPException 404: If contact person or process type not found
    """
    await get_or_404(db, Person, request_data.contact_person_id, "Person")
    await get_or_404(db, ProcessType, request_data.process_type_id, "Process type")

    new_request = ProcessRequest(
        company_id=user.company_id,
        created_by=user.id,
        status=RequestStatus.PENDING,
        **request_data.model_dump()
    )

    db.add(new_request)
    await db.flush()
    await db.refresh(new_request)

    logger.info("Process request %s submitted by %s", new_request.id, user.id)
    return new_request


@router.get("", response_model=List[ProcessRequestResponse])
async def list_process_requests(
    status: Optional[RequestStatus] = None,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List requests, newest first. Clients only see their company's requests."""
    query = select(ProcessRequest).order_by(ProcessRequest.created_at.desc())

    scope = company_scope(user)
    if scope is not None:
        query = query.where(ProcessRequest.company_id == scope)
    if status is not None:
        query = query.where(ProcessRequest.status == status)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{request_id}", response_model=ProcessRequestResponse)
async def get_process_request(
    request_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Raises:
        HTTPException 403: If a client asks for another company's request
        HTTPException 404: If request not found
    """
    request = await get_or_404(db, ProcessRequest, request_id, "Process request")
    require_company_access(user, request.company_id)
    return request


@router.post("/{request_id}/approve", response_model=MainProcessResponse)
async def approve_request(
    request_id: str,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Approve a pending request and return the main process it opened.

    Raises:
        HTTPException 400: If request is not pending
        HTTPException 404: If request not found
    """
    request = await get_or_404(db, ProcessRequest, request_id, "Process request")
    main_process = await approve_process_request(db, request, admin)
    await db.refresh(main_process)
    return main_process


@router.post("/{request_id}/reject", response_model=ProcessRequestResponse)
async def reject_request(
    request_id: str,
    rejection: ProcessRequestReject,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Raises:
        HTTPException 400: If request is not pending
        HTTPException 404: If request not found
    """
    request = await get_or_404(db, ProcessRequest, request_id, "Process request")
    request = await reject_process_request(db, request, admin, rejection.rejection_reason)
    await db.refresh(request)
    return request


@router.patch("/{request_id}", response_model=ProcessRequestResponse)
async def update_process_request(
    request_id: str,
    request_data: ProcessRequestUpdate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Update a pending request. Only supplied fields change.

    Raises:
        HTTPException 400: If request is no longer pending
        HTTPException 404: If request not found
    """
    request = await get_or_404(db, ProcessRequest, request_id, "Process request")

    if not request.is_pending:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot update request with status: {request.status.value}"
        )

    for field, value in request_data.model_dump(exclude_unset=True).items():
        setattr(request, field, value)

    await db.flush()
    await db.refresh(request)
    return request


@router.delete("/{request_id}", status_code=204)
async def delete_process_request(
    request_id: str,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Raises:
        HTTPException 400: If the request was approved into a main process
        HTTPException 404: If request not found
    """
    request = await get_or_404(db, ProcessRequest, request_id, "Process request")

    if request.status == RequestStatus.APPROVED and request.approved_main_process_id:
        raise HTTPException(
            status_code=400,
            detail="Cannot delete an approved request that has created a main process"
        )

    await db.delete(request)
    await db.flush()
    logger.info("Process request %s deleted by %s", request_id, admin.id)
