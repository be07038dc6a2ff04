"""
Role-based access helpers.

Authentication is done by the gateway in front of the API, which forwards the
caller's user profile id in the X-User-Id header. These dependencies resolve
that profile and enforce admin/client roles and company scoping.
"""
import logging
from typing import Optional
from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from casework.core.database import get_db
from casework.models.enums import UserRole
from casework.models.user import UserProfile

logger = logging.getLogger(__name__)


async def get_current_user(
    x_user_id: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db)
) -> UserProfile:
    """
    Resolve the caller's profile.

    Raises:
        HTTPException 401: If the header is missing or the profile is unknown/inactive
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")

    user = await db.get(UserProfile, x_user_id)
    if user is None or not user.is_active:
        logger.warning("Rejected request for unknown or inactive user %s", x_user_id)
        raise HTTPException(
            status_code=401,
            detail="User profile not found. Please contact an administrator to set up your profile."
        )
    return user


async def require_admin(user: UserProfile = Depends(get_current_user)) -> UserProfile:
    """Raises HTTPException 403 unless the caller is an admin"""
    if not user.is_admin:
        raise HTTPException(
            status_code=403,
            detail="Access denied: This operation requires administrator privileges"
        )
    return user


async def require_client(user: UserProfile = Depends(get_current_user)) -> UserProfile:
    """Raises HTTPException 403 unless the caller is a client with a company"""
    if user.role != UserRole.CLIENT:
        raise HTTPException(status_code=403, detail="Access denied: This operation requires client role")
    if not user.company_id:
        raise HTTPException(
            status_code=403,
            detail="Invalid client profile: Missing company assignment. Please contact an administrator."
        )
    return user


def can_access_company(user: UserProfile, company_id: Optional[str]) -> bool:
    """Admins access every company, clients only their own"""
    if user.is_admin:
        return True
    if user.role == UserRole.CLIENT:
        return company_id is not None and user.company_id == company_id
    return False


def require_company_access(user: UserProfile, company_id: Optional[str]) -> None:
    """Raises HTTPException 403 when the caller cannot see the company's data"""
    if not can_access_company(user, company_id):
        logger.warning("User %s denied access to company %s", user.id, company_id)
        raise HTTPException(
            status_code=403,
            detail="Access denied: You do not have permission to access this company's data"
        )


def company_scope(user: UserProfile) -> Optional[str]:
    """
    Company id list queries must be filtered by, or None for admins.

    Raises:
        HTTPException 403: If a client has no company assignment
    """
    if user.is_admin:
        return None
    if not user.company_id:
        raise HTTPException(status_code=403, detail="Client user must have a company assignment")
    return user.company_id
