"""Process workflow service: request approval, status changes and history."""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from casework.core.config import settings
from casework.models.enums import IndividualProcessStatus, MainProcessStatus, RequestStatus
from casework.models.process import IndividualProcess, MainProcess, ProcessHistory
from casework.models.process_request import ProcessRequest
from casework.models.user import UserProfile
from casework.services.activity_service import INDIVIDUAL_PROCESS, MAIN_PROCESS, PROCESS_REQUEST, log_activity
from casework.services.status_rules import (
    get_next_allowed_individual_statuses,
    get_next_allowed_main_statuses,
    is_valid_individual_status_transition,
    is_valid_main_status_transition,
)

logger = logging.getLogger(__name__)


async def next_reference_number(db: AsyncSession, year: Optional[int] = None) -> str:
    """Reference number for a new main process, e.g. PR-2025-0007.

    The sequence is the number of existing main processes plus one.
    """
    year = year or datetime.utcnow().year
    result = await db.execute(select(func.count(MainProcess.id)))
    sequence_number = result.scalar_one() + 1
    return f"{settings.REFERENCE_PREFIX}-{year}-{sequence_number:04d}"


async def approve_process_request(
    db: AsyncSession,
    request: ProcessRequest,
    reviewer: UserProfile
) -> MainProcess:
    """Approve a pending request and open its main process.

    Raises:
        HTTPException 400: If the request is not pending
    """
    if not request.is_pending:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot approve request with status: {request.status.value}"
        )

    now = datetime.utcnow()
    main_process = MainProcess(
        reference_number=await next_reference_number(db, now.year),
        company_id=request.company_id,
        contact_person_id=request.contact_person_id,
        process_type_id=request.process_type_id,
        workplace_city=request.workplace_city,
        consulate=request.consulate,
        is_urgent=request.is_urgent,
        request_date=request.request_date,
        notes=request.notes,
        status=MainProcessStatus.DRAFT,
    )
    db.add(main_process)
    await db.flush()

    request.status = RequestStatus.APPROVED
    request.reviewed_by = reviewer.id
    request.reviewed_at = now
    request.approved_main_process_id = main_process.id
    request.updated_at = now
    await db.flush()

    await log_activity(
        db, reviewer, "approved", PROCESS_REQUEST, request.id,
        {"main_process_id": main_process.id, "reference_number": main_process.reference_number}
    )

    logger.info(
        "Process request %s approved by %s as main process %s",
        request.id, reviewer.id, main_process.reference_number
    )
    return main_process


async def reject_process_request(
    db: AsyncSession,
    request: ProcessRequest,
    reviewer: UserProfile,
    rejection_reason: str
) -> ProcessRequest:
    """
    Raises:
        HTTPException 400: If the request is not pending or the reason is blank
    """
    if not request.is_pending:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot reject request with status: {request.status.value}"
        )
    if not rejection_reason or not rejection_reason.strip():
        raise HTTPException(status_code=400, detail="Rejection reason is required")

    now = datetime.utcnow()
    request.status = RequestStatus.REJECTED
    request.reviewed_by = reviewer.id
    request.reviewed_at = now
    request.rejection_reason = rejection_reason
    request.updated_at = now
    await db.flush()
    await log_activity(
        db, reviewer, "rejected", PROCESS_REQUEST, request.id,
        {"rejection_reason": rejection_reason}
    )

    logger.info("Process request %s rejected by %s", request.id, reviewer.id)
    return request


async def change_individual_status(
    db: AsyncSession,
    process: IndividualProcess,
    new_status: IndividualProcessStatus,
    changed_by: UserProfile,
    notes: Optional[str] = None
) -> ProcessHistory:
    """Move an individual process to a new status and record it in the history.

    Entering completed stamps completed_at; leaving it clears the stamp.

    Raises:
        HTTPException 400: If the transition is not allowed
    """
    previous_status = process.status
    if not is_valid_individual_status_transition(previous_status, new_status):
        allowed = ", ".join(s.value for s in get_next_allowed_individual_statuses(previous_status))
        logger.warning(
            "Rejected status change %s -> %s on individual process %s",
            previous_status.value, new_status.value, process.id
        )
        raise HTTPException(
            status_code=400,
            detail=f"Invalid status transition from {previous_status.value} to {new_status.value}. "
                   f"Allowed: {allowed or 'none'}"
        )

    now = datetime.utcnow()
    process.status = new_status
    if new_status == IndividualProcessStatus.COMPLETED:
        process.completed_at = now
    elif previous_status == IndividualProcessStatus.COMPLETED:
        process.completed_at = None
    process.updated_at = now

    history = ProcessHistory(
        individual_process_id=process.id,
        previous_status=previous_status,
        new_status=new_status,
        changed_by=changed_by.id,
        changed_at=now,
        notes=notes,
    )
    db.add(history)
    await db.flush()

    await log_activity(
        db, changed_by, "status_changed", INDIVIDUAL_PROCESS, process.id,
        {"previous_status": previous_status.value, "new_status": new_status.value, "notes": notes}
    )

    logger.info(
        "Individual process %s moved %s -> %s by %s",
        process.id, previous_status.value, new_status.value, changed_by.id
    )
    return history


async def log_initial_status(db: AsyncSession, process: IndividualProcess, created_by: UserProfile) -> ProcessHistory:
    """History entry for a newly created process (no previous status)"""
    history = ProcessHistory(
        individual_process_id=process.id,
        previous_status=None,
        new_status=process.status,
        changed_by=created_by.id,
        notes="Process created",
    )
    db.add(history)
    await db.flush()
    await log_activity(
        db, created_by, "created", INDIVIDUAL_PROCESS, process.id,
        {"main_process_id": process.main_process_id, "person_id": process.person_id}
    )
    return history


async def change_main_status(
    db: AsyncSession,
    main_process: MainProcess,
    new_status: MainProcessStatus,
    changed_by: UserProfile
) -> MainProcess:
    """
    Raises:
        HTTPException 400: If the transition is not allowed
    """
    if not is_valid_main_status_transition(main_process.status, new_status):
        allowed = ", ".join(s.value for s in get_next_allowed_main_statuses(main_process.status))
        raise HTTPException(
            status_code=400,
            detail=f"Invalid status transition from {main_process.status.value} to {new_status.value}. "
                   f"Allowed: {allowed or 'none'}"
        )

    previous_status = main_process.status
    now = datetime.utcnow()
    main_process.status = new_status
    main_process.completed_at = now if new_status == MainProcessStatus.COMPLETED else None
    main_process.updated_at = now
    await db.flush()
    await log_activity(
        db, changed_by, "status_changed", MAIN_PROCESS, main_process.id,
        {"previous_status": previous_status.value, "new_status": new_status.value}
    )

    logger.info("Main process %s moved to %s", main_process.reference_number, new_status.value)
    return main_process
