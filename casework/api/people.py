"""
People and passport API endpoints
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from casework.core.database import get_db
from casework.core.security import require_admin
from casework.models.person import Person, Passport
from casework.models.user import UserProfile
from casework.schemas.person import PersonCreate, PersonUpdate, PersonResponse, PassportCreate, PassportResponse
from casework.utils.lookups import get_or_404

router = APIRouter()


@router.post("", response_model=PersonResponse, status_code=201)
async def create_person(
    person_data: PersonCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Register a person (candidate or company contact)"""
    new_person = Person(**person_data.model_dump())
    if new_person.email:
        new_person.email = new_person.email.lower()

    db.add(new_person)
    await db.flush()
    await db.refresh(new_person)

    return new_person


@router.get("", response_model=List[PersonResponse])
async def list_people(
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(select(Person).order_by(Person.full_name))
    return result.scalars().all()


@router.get("/{person_id}", response_model=PersonResponse)
async def get_person(
    person_id: str,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await get_or_404(db, Person, person_id)


@router.patch("/{person_id}", response_model=PersonResponse)
async def update_person(
    person_id: str,
    person_data: PersonUpdate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Update a person. Only supplied fields change."""
    person = await get_or_404(db, Person, person_id)

    for field, value in person_data.model_dump(exclude_unset=True).items():
        setattr(person, field, value)

    await db.flush()
    await db.refresh(person)
    return person


@router.post("/{person_id}/passports", response_model=PassportResponse, status_code=201)
async def create_passport(
    person_id: str,
    passport_data: PassportCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Add a passport to a person.

    Raises:
        HTTPException 404: If person not found
    """
    await get_or_404(db, Person, person_id)

    new_passport = Passport(person_id=person_id, **passport_data.model_dump())

    db.add(new_passport)
    await db.flush()
    await db.refresh(new_passport)

    return new_passport


@router.get("/{person_id}/passports", response_model=List[PassportResponse])
async def list_passports(
    person_id: str,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    await get_or_404(db, Person, person_id)

    result = await db.execute(
        select(Passport)
        .where(Passport.person_id == person_id)
        .order_by(Passport.expiry_date.desc())
    )
    return result.scalars().all()
