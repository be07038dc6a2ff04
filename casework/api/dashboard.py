"""
Dashboard API endpoints

Summaries over individual processes and delivered documents. Admins see
every company; clients only see their own company's processes.
"""
import logging
from collections import Counter
from datetime import date, datetime, timedelta
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from casework.core.database import get_db
from casework.core.security import company_scope, get_current_user, require_admin
from casework.models.delivered_document import DeliveredDocument
from casework.models.document_type import DocumentType
from casework.models.enums import DeliveredDocumentStatus, IndividualProcessStatus
from casework.models.legal_framework import ProcessType
from casework.models.person import Person
from casework.models.process import IndividualProcess, MainProcess
from casework.models.user import UserProfile
from casework.schemas.dashboard import (
    CompletionRate,
    PersonDocumentStatus,
    ProcessStats,
    ReviewQueueItem,
    UpcomingDeadline,
)

logger = logging.getLogger(__name__)

router = APIRouter()

REVIEW_QUEUE_SIZE = 20
DEADLINE_WINDOW_DAYS = 30
COMPLETION_WINDOW_DAYS = 30

AWAITING_REVIEW = (DeliveredDocumentStatus.UPLOADED, DeliveredDocumentStatus.UNDER_REVIEW)
CLOSED_STATUSES = (
    IndividualProcessStatus.COMPLETED,
    IndividualProcessStatus.CANCELLED,
    IndividualProcessStatus.GOVERNMENT_REJECTED,
)


def scoped(query, user: UserProfile):
    """Restrict a query joined to MainProcess to the caller's company"""
    scope = company_scope(user)
    if scope is not None:
        query = query.where(MainProcess.company_id == scope)
    return query


@router.get("/stats", response_model=ProcessStats)
async def get_process_stats(
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Count of individual processes per status, with percentages"""
    result = await db.execute(scoped(
        select(IndividualProcess.status)
        .join(MainProcess, MainProcess.id == IndividualProcess.main_process_id),
        user
    ))
    counts = Counter(result.scalars().all())
    total = sum(counts.values())

    return ProcessStats(
        total=total,
        status_counts=dict(counts),
        status_percentages={status: count / total * 100 for status, count in counts.items()},
    )


@router.get("/completion-rate", response_model=CompletionRate)
async def get_completion_rate(
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Share of individual processes created in the last 30 days that are completed"""
    since = datetime.utcnow() - timedelta(days=COMPLETION_WINDOW_DAYS)
    result = await db.execute(select(IndividualProcess).where(IndividualProcess.created_at >= since))
    recent = result.scalars().all()
    completed = [p for p in recent if p.completed_at is not None]

    average_days = 0.0
    if completed:
        total_seconds = sum((p.completed_at - p.created_at).total_seconds() for p in completed)
        average_days = total_seconds / len(completed) / 86400

    return CompletionRate(
        total_processes=len(recent),
        completed_processes=len(completed),
        completion_rate=len(completed) / len(recent) * 100 if recent else 0.0,
        average_days_to_complete=round(average_days),
    )


@router.get("/review-queue", response_model=List[ReviewQueueItem])
async def get_review_queue(
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Latest uploaded documents waiting for review, newest first"""
    result = await db.execute(
        select(DeliveredDocument, DocumentType, IndividualProcess, Person, MainProcess)
        .join(IndividualProcess, IndividualProcess.id == DeliveredDocument.individual_process_id)
        .join(MainProcess, MainProcess.id == IndividualProcess.main_process_id)
        .outerjoin(DocumentType, DocumentType.id == DeliveredDocument.document_type_id)
        .outerjoin(Person, Person.id == IndividualProcess.person_id)
        .where(
            DeliveredDocument.is_latest == True,
            DeliveredDocument.status.in_(AWAITING_REVIEW)
        )
        .order_by(DeliveredDocument.uploaded_at.desc())
        .limit(REVIEW_QUEUE_SIZE)
    )

    return [
        ReviewQueueItem(
            id=document.id,
            individual_process_id=document.individual_process_id,
            document_type_id=document.document_type_id,
            document_type_name=document_type.name if document_type else None,
            person_name=person.full_name if person else None,
            reference_number=main_process.reference_number,
            filename=document.filename,
            status=document.status,
            version=document.version,
            uploaded_at=document.uploaded_at,
        )
        for document, document_type, process, person, main_process in result.all()
    ]


@router.get("/upcoming-deadlines", response_model=List[UpcomingDeadline])
async def get_upcoming_deadlines(
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Open processes with a deadline between today and 30 days from now, soonest first"""
    today = date.today()
    query = scoped(
        select(IndividualProcess, MainProcess, Person, ProcessType)
        .join(MainProcess, MainProcess.id == IndividualProcess.main_process_id)
        .outerjoin(Person, Person.id == IndividualProcess.person_id)
        .outerjoin(ProcessType, ProcessType.id == MainProcess.process_type_id)
        .where(
            IndividualProcess.deadline_date >= today,
            IndividualProcess.deadline_date <= today + timedelta(days=DEADLINE_WINDOW_DAYS),
            IndividualProcess.status.not_in(CLOSED_STATUSES)
        )
        .order_by(IndividualProcess.deadline_date),
        user
    )
    result = await db.execute(query)

    return [
        UpcomingDeadline(
            individual_process_id=process.id,
            status=process.status,
            deadline_date=process.deadline_date,
            days_remaining=(process.deadline_date - today).days,
            person_name=person.full_name if person else None,
            reference_number=main_process.reference_number,
            process_type_name=process_type.name if process_type else None,
        )
        for process, main_process, person, process_type in result.all()
    ]


@router.get("/document-status", response_model=List[PersonDocumentStatus])
async def get_document_status(
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Per worker counts of the latest delivered documents by review state"""
    result = await db.execute(scoped(
        select(IndividualProcess, Person)
        .join(MainProcess, MainProcess.id == IndividualProcess.main_process_id)
        .join(Person, Person.id == IndividualProcess.person_id)
        .order_by(Person.full_name),
        user
    ))
    rows = result.all()
    if not rows:
        return []

    result = await db.execute(
        select(DeliveredDocument).where(
            DeliveredDocument.individual_process_id.in_([process.id for process, _ in rows]),
            DeliveredDocument.is_latest == True
        )
    )
    documents_by_process = {}
    for document in result.scalars().all():
        documents_by_process.setdefault(document.individual_process_id, []).append(document)

    statuses = []
    for process, person in rows:
        documents = documents_by_process.get(process.id, [])
        statuses.append(PersonDocumentStatus(
            individual_process_id=process.id,
            person_id=person.id,
            person_name=person.full_name,
            pending=sum(1 for d in documents if d.is_placeholder),
            under_review=sum(1 for d in documents if d.status in AWAITING_REVIEW),
            approved=sum(1 for d in documents if d.status == DeliveredDocumentStatus.APPROVED),
            rejected=sum(1 for d in documents if d.status == DeliveredDocumentStatus.REJECTED),
            total=len(documents),
        ))
    return statuses
