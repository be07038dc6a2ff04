"""Delivered document service: uploads, versioning, review and conditions."""

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import HTTPException, UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from casework.models.delivered_document import DeliveredDocument, DeliveredDocumentCondition
from casework.models.document_type import DocumentType, DocumentTypeCondition
from casework.models.enums import DeliveredDocumentStatus
from casework.models.process import IndividualProcess, MainProcess
from casework.models.user import UserProfile
from casework.schemas.document import ConditionUpdate, DocumentReview
from casework.services.activity_service import DELIVERED_DOCUMENT, log_activity
from casework.utils.file_handling import receive_upload, store_in_bucket

logger = logging.getLogger(__name__)


async def upload_document(
    db: AsyncSession,
    process: IndividualProcess,
    document_type_id: str,
    file: UploadFile,
    uploaded_by: UserProfile,
    issue_date: Optional[date] = None,
    expiry_date: Optional[date] = None
) -> DeliveredDocument:
    """
    Store a file as the latest delivered document of a type for a process.

    Features:
    - Extension and size validation, SHA256 duplicate detection within the process
    - A placeholder record is filled in place
    - Otherwise a new version is created and the previous one loses is_latest
    - One condition record per active condition of the document type

    Raises:
        HTTPException 400: If file type not allowed or file is empty
        HTTPException 404: If the document type does not exist
        HTTPException 409: If the same file was already delivered for this process
        HTTPException 413: If file size exceeds limit
    """
    document_type = await db.get(DocumentType, document_type_id)
    if document_type is None:
        raise HTTPException(
            status_code=404,
            detail=f"Document type with id {document_type_id} not found"
        )

    received = await receive_upload(file)

    result = await db.execute(
        select(DeliveredDocument).where(
            DeliveredDocument.individual_process_id == process.id,
            DeliveredDocument.sha256 == received.sha256
        )
    )
    existing_doc = result.scalars().first()

    if existing_doc:
        logger.warning("Duplicate upload %s rejected for individual process %s", received.sha256, process.id)
        raise HTTPException(
            status_code=409,
            detail=f"Document with hash {received.sha256} already exists in this process (filename: {existing_doc.filename})"
        )

    result = await db.execute(
        select(DeliveredDocument).where(
            DeliveredDocument.individual_process_id == process.id,
            DeliveredDocument.document_type_id == document_type_id,
            DeliveredDocument.is_latest == True
        )
    )
    latest = result.scalars().first()

    now = datetime.utcnow()
    if latest is not None and latest.is_placeholder:
        document = latest
    else:
        if latest is not None:
            latest.is_latest = False
        main_process = await db.get(MainProcess, process.main_process_id)
        document = DeliveredDocument(
            individual_process_id=process.id,
            document_type_id=document_type_id,
            person_id=process.person_id,
            company_id=process.company_applicant_id or (main_process.company_id if main_process else None),
            version=(latest.version + 1) if latest is not None else 1,
            is_latest=True,
        )
        db.add(document)

    document.filename = received.filename
    document.sha256 = received.sha256
    document.mime_type = received.mime_type
    document.size_bytes = received.size_bytes
    document.stored_path = str(store_in_bucket(received, process.id))
    document.status = DeliveredDocumentStatus.UPLOADED
    document.issue_date = issue_date
    document.expiry_date = expiry_date
    document.uploaded_by = uploaded_by.id
    document.uploaded_at = now
    document.reviewed_by = None
    document.reviewed_at = None
    document.rejection_reason = None
    await db.flush()

    result = await db.execute(
        select(DocumentTypeCondition).where(
            DocumentTypeCondition.document_type_id == document_type_id,
            DocumentTypeCondition.is_active == True
        )
    )
    for condition in result.scalars().all():
        db.add(DeliveredDocumentCondition(
            document_delivered_id=document.id,
            document_type_condition_id=condition.id,
            is_fulfilled=False,
        ))

    await log_activity(
        db, uploaded_by, "uploaded", DELIVERED_DOCUMENT, document.id,
        {"document_type_id": document_type_id, "version": document.version, "filename": document.filename}
    )
    await db.refresh(document)

    logger.info(
        "Uploaded %s as version %d of document type %s for individual process %s",
        document.filename, document.version, document_type_id, process.id
    )
    return document


async def review_document(
    db: AsyncSession,
    document: DeliveredDocument,
    review: DocumentReview,
    reviewer: UserProfile
) -> DeliveredDocument:
    """
    Raises:
        HTTPException 400: If nothing has been uploaded for the record yet
    """
    if document.is_placeholder:
        raise HTTPException(status_code=400, detail="Cannot review a document that has not been uploaded")

    document.status = review.status
    document.rejection_reason = review.rejection_reason if review.status == DeliveredDocumentStatus.REJECTED else None
    document.reviewed_by = reviewer.id
    document.reviewed_at = datetime.utcnow()
    await db.flush()
    await log_activity(
        db, reviewer, review.status.value, DELIVERED_DOCUMENT, document.id,
        {"rejection_reason": document.rejection_reason} if document.rejection_reason else None
    )
    await db.refresh(document)

    logger.info("Delivered document %s %s by %s", document.id, review.status.value, reviewer.id)
    return document


async def update_condition(
    db: AsyncSession,
    document: DeliveredDocument,
    condition_id: str,
    update: ConditionUpdate,
    user: UserProfile
) -> DeliveredDocumentCondition:
    """Mark one condition of a delivered document as fulfilled or not.

    condition_id may be the condition record's id or the document type
    condition's id.

    Raises:
        HTTPException 404: If the document has no such condition
    """
    result = await db.execute(
        select(DeliveredDocumentCondition).where(
            DeliveredDocumentCondition.document_delivered_id == document.id,
            (DeliveredDocumentCondition.id == condition_id)
            | (DeliveredDocumentCondition.document_type_condition_id == condition_id)
        )
    )
    condition = result.scalars().first()

    if not condition:
        raise HTTPException(
            status_code=404,
            detail=f"Condition {condition_id} not found for document {document.id}"
        )

    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(condition, field, value)
    condition.fulfilled_at = datetime.utcnow() if condition.is_fulfilled else None
    condition.fulfilled_by = user.id if condition.is_fulfilled else None
    await db.flush()
    await log_activity(
        db, user, "condition_updated", DELIVERED_DOCUMENT, document.id,
        {"condition_id": condition.id, "is_fulfilled": condition.is_fulfilled}
    )
    await db.refresh(condition)
    return condition
