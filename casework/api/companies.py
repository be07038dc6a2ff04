"""
Company API endpoints
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from casework.core.database import get_db
from casework.core.security import company_scope, get_current_user, require_admin, require_company_access
from casework.models.company import Company
from casework.models.user import UserProfile
from casework.schemas.company import CompanyCreate, CompanyUpdate, CompanyResponse
from casework.utils.lookups import get_or_404

router = APIRouter()


@router.post("", response_model=CompanyResponse, status_code=201)
async def create_company(
    company_data: CompanyCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Create a company (admin only)"""
    new_company = Company(**company_data.model_dump())

    db.add(new_company)
    await db.flush()
    await db.refresh(new_company)

    return new_company


@router.get("", response_model=List[CompanyResponse])
async def list_companies(
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List companies. Clients only see their own company."""
    query = select(Company).order_by(Company.name)
    scope = company_scope(user)
    if scope is not None:
        query = query.where(Company.id == scope)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: str,
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Raises:
        HTTPException 403: If a client asks for another company
        HTTPException 404: If company not found
    """
    require_company_access(user, company_id)
    return await get_or_404(db, Company, company_id)


@router.patch("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: str,
    company_data: CompanyUpdate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Update a company (admin only). Only supplied fields change."""
    company = await get_or_404(db, Company, company_id)

    for field, value in company_data.model_dump(exclude_unset=True).items():
        setattr(company, field, value)

    await db.flush()
    await db.refresh(company)
    return company
