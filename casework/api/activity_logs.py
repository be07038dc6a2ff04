"""
Activity log API endpoints
"""
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from casework.core.database import get_db
from casework.core.security import get_current_user
from casework.models.user import UserProfile
from casework.schemas.activity import ActivityLogPage, ActivityLogResponse, ActivityUser
from casework.services.activity_service import query_activity_logs

router = APIRouter()


def to_response(entry, user: Optional[UserProfile]) -> ActivityLogResponse:
    response = ActivityLogResponse.model_validate(entry)
    if user is not None:
        response.user = ActivityUser.model_validate(user)
    return response


@router.get("", response_model=ActivityLogPage)
async def list_activity_logs(
    user_id: Optional[str] = None,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    action: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Activity entries, newest first.

    Admins see everyone's activity; other users only their own.
    """
    rows, total = await query_activity_logs(
        db,
        user,
        user_id=user_id,
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        offset=offset,
    )
    return ActivityLogPage(
        logs=[to_response(entry, actor) for entry, actor in rows],
        total=total,
        has_more=offset + limit < total,
    )


@router.get("/{entity_type}/{entity_id}", response_model=ActivityLogPage)
async def get_entity_history(
    entity_type: str,
    entity_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Every visible entry about one record, newest first"""
    rows, total = await query_activity_logs(
        db, user, entity_type=entity_type, entity_id=entity_id, limit=None
    )
    return ActivityLogPage(
        logs=[to_response(entry, actor) for entry, actor in rows],
        total=total,
        has_more=False,
    )
