"""
User profile API endpoints
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from casework.core.database import get_db
from casework.core.security import get_current_user, require_admin
from casework.models.company import Company
from casework.models.user import UserProfile
from casework.schemas.user import UserCreate, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    user_data: UserCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Create a user profile (admin only).

    Raises:
        HTTPException 404: If the client's company does not exist
        HTTPException 409: If a profile with the same email already exists
    """
    result = await db.execute(
        select(UserProfile).where(UserProfile.email == user_data.email.lower())
    )
    existing_user = result.scalar_one_or_none()

    if existing_user:
        raise HTTPException(
            status_code=409,
            detail=f"User with email {user_data.email} already exists"
        )

    if user_data.company_id and await db.get(Company, user_data.company_id) is None:
        raise HTTPException(
            status_code=404,
            detail=f"Company with id {user_data.company_id} not found"
        )

    new_user = UserProfile(
        email=user_data.email.lower(),
        full_name=user_data.full_name,
        role=user_data.role,
        company_id=user_data.company_id,
        phone_number=user_data.phone_number
    )

    db.add(new_user)
    await db.flush()
    await db.refresh(new_user)

    logger.info("User %s (%s) created by %s", new_user.email, new_user.role.value, admin.id)
    return new_user


@router.get("", response_model=List[UserResponse])
async def list_users(
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """List all user profiles (admin only)"""
    result = await db.execute(select(UserProfile).order_by(UserProfile.full_name))
    return result.scalars().all()


@router.get("/me", response_model=UserResponse)
async def get_me(user: UserProfile = Depends(get_current_user)):
    """Profile of the caller"""
    return user
