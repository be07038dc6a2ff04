"""Activity log: recording and querying who changed what."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from casework.models.activity_log import ActivityLog
from casework.models.user import UserProfile

logger = logging.getLogger(__name__)

# Entity types written by the services
PROCESS_REQUEST = "process_request"
MAIN_PROCESS = "main_process"
INDIVIDUAL_PROCESS = "individual_process"
DELIVERED_DOCUMENT = "delivered_document"
TASK = "task"


async def log_activity(
    db: AsyncSession,
    user: UserProfile,
    action: str,
    entity_type: str,
    entity_id: str,
    details: Optional[Dict[str, Any]] = None
) -> ActivityLog:
    """Add an activity entry to the current transaction"""
    entry = ActivityLog(
        user_id=user.id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details,
    )
    db.add(entry)
    await db.flush()
    logger.debug("Activity %s %s:%s by %s", action, entity_type, entity_id, user.id)
    return entry


async def query_activity_logs(
    db: AsyncSession,
    viewer: UserProfile,
    user_id: Optional[str] = None,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    action: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    limit: Optional[int] = 100,
    offset: int = 0
) -> Tuple[List[Tuple[ActivityLog, Optional[UserProfile]]], int]:
    """
    Filtered activity entries, newest first, with the acting user.

    Admins see every entry; everyone else only sees their own actions.
    A limit of None returns every matching entry.

    Returns:
        Tuple of (page of (entry, user) pairs, total matching entries)
    """
    conditions = []
    if not viewer.is_admin:
        conditions.append(ActivityLog.user_id == viewer.id)
    if user_id:
        conditions.append(ActivityLog.user_id == user_id)
    if entity_type:
        conditions.append(ActivityLog.entity_type == entity_type)
    if entity_id:
        conditions.append(ActivityLog.entity_id == entity_id)
    if action:
        conditions.append(ActivityLog.action == action)
    if start_date:
        conditions.append(ActivityLog.created_at >= start_date)
    if end_date:
        conditions.append(ActivityLog.created_at <= end_date)

    total = (await db.execute(
        select(func.count(ActivityLog.id)).where(*conditions)
    )).scalar_one()

    query = (
        select(ActivityLog, UserProfile)
        .outerjoin(UserProfile, UserProfile.id == ActivityLog.user_id)
        .where(*conditions)
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id)
        .offset(offset)
    )
    if limit is not None:
        query = query.limit(limit)

    result = await db.execute(query)
    return result.all(), total
