"""Pytest configuration and fixtures."""

import os
import sys
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Point the app at a throwaway database and bucket before it is imported
_test_dir = Path(tempfile.mkdtemp(prefix="casework-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir / 'test.db'}"
os.environ["BUCKET_DIR"] = str(_test_dir / "bucket")

from main import app  # noqa: E402
from casework.core.database import SessionLocal, create_tables, drop_tables, engine  # noqa: E402
from casework.models import Company, Person, UserProfile, UserRole  # noqa: E402


def auth(user: UserProfile) -> dict:
    """Headers the gateway would forward for this user"""
    return {"X-User-Id": user.id}


@pytest_asyncio.fixture
async def database():
    """Fresh schema for every test"""
    await drop_tables()
    await create_tables()
    yield
    await engine.dispose()


async def _add(instance):
    async with SessionLocal() as session:
        session.add(instance)
        await session.commit()
        await session.refresh(instance)
    return instance


@pytest_asyncio.fixture
async def admin_user(database):
    return await _add(UserProfile(email="admin@example.com", full_name="Admin", role=UserRole.ADMIN))


@pytest_asyncio.fixture
async def company(database):
    return await _add(Company(name="Acme Offshore Ltda", tax_id="12.345.678/0001-90", city="Rio de Janeiro"))


@pytest_asyncio.fixture
async def other_company(database):
    return await _add(Company(name="Globex Engenharia", city="Macaé"))


@pytest_asyncio.fixture
async def client_user(company):
    return await _add(UserProfile(
        email="hr@acme.example.com",
        full_name="Acme HR",
        role=UserRole.CLIENT,
        company_id=company.id,
    ))


@pytest_asyncio.fixture
async def other_client_user(other_company):
    return await _add(UserProfile(
        email="hr@globex.example.com",
        full_name="Globex HR",
        role=UserRole.CLIENT,
        company_id=other_company.id,
    ))


@pytest_asyncio.fixture
async def contact_person(database):
    return await _add(Person(full_name="Maria Souza", email="maria@acme.example.com"))


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as async_client:
        yield async_client


@pytest_asyncio.fixture
async def framework_setup(client, admin_user):
    """
    A legal framework requiring:
    - Passport (min 180 days remaining, maps passport.passport_number), sort 1
    - Criminal record (max age 90 days, "Apostilled" condition), sort 2
    - mother_name of the person as a standalone info field, sort 3
    """
    headers = auth(admin_user)

    response = await client.post("/process-types", json={"name": "Work visa"}, headers=headers)
    assert response.status_code == 201
    process_type_id = response.json()["id"]

    response = await client.post(
        "/legal-frameworks",
        json={"name": "RN 02 - Technical assistance", "process_type_id": process_type_id},
        headers=headers,
    )
    assert response.status_code == 201
    framework_id = response.json()["id"]

    response = await client.post("/document-types", json={"name": "Passport", "code": "PASSPORT"}, headers=headers)
    passport_type_id = response.json()["id"]
    response = await client.post(
        f"/document-types/{passport_type_id}/field-mappings",
        json={"entity_type": "passport", "field_path": "passport_number", "label": "Número do passaporte"},
        headers=headers,
    )
    assert response.status_code == 201

    response = await client.post(
        "/document-types", json={"name": "Criminal record", "code": "CRIMINAL_RECORD"}, headers=headers
    )
    criminal_type_id = response.json()["id"]
    response = await client.post(
        f"/document-types/{criminal_type_id}/conditions",
        json={"name": "Apostilled"},
        headers=headers,
    )
    assert response.status_code == 201
    condition_id = response.json()["id"]

    response = await client.post(
        f"/legal-frameworks/{framework_id}/documents",
        json={
            "document_type_id": passport_type_id,
            "validity_type": "min_remaining",
            "validity_days": 180,
            "sort_order": 1,
        },
        headers=headers,
    )
    assert response.status_code == 201
    response = await client.post(
        f"/legal-frameworks/{framework_id}/documents",
        json={
            "document_type_id": criminal_type_id,
            "validity_type": "max_age",
            "validity_days": 90,
            "sort_order": 2,
        },
        headers=headers,
    )
    assert response.status_code == 201

    response = await client.post(
        f"/legal-frameworks/{framework_id}/info-requirements",
        json={"entity_type": "person", "field_path": "mother_name", "label": "Nome da mãe", "sort_order": 3},
        headers=headers,
    )
    assert response.status_code == 201

    return {
        "process_type_id": process_type_id,
        "legal_framework_id": framework_id,
        "passport_type_id": passport_type_id,
        "criminal_type_id": criminal_type_id,
        "condition_id": condition_id,
    }


@pytest_asyncio.fixture
async def individual_process(client, admin_user, company, framework_setup):
    """An individual process under a main process of `company`, with the framework's checklist seeded"""
    headers = auth(admin_user)

    response = await client.post("/main-processes", json={"company_id": company.id}, headers=headers)
    assert response.status_code == 201
    main_process_id = response.json()["id"]

    response = await client.post(
        "/people",
        json={"full_name": "John Smith", "nationality": "British", "profession": "Welder"},
        headers=headers,
    )
    person_id = response.json()["id"]

    response = await client.post(
        f"/people/{person_id}/passports",
        json={"passport_number": "GB1234567", "issuing_country": "GB"},
        headers=headers,
    )
    assert response.status_code == 201
    passport_id = response.json()["id"]

    response = await client.post(
        "/individual-processes",
        json={
            "main_process_id": main_process_id,
            "person_id": person_id,
            "passport_id": passport_id,
            "legal_framework_id": framework_setup["legal_framework_id"],
        },
        headers=headers,
    )
    assert response.status_code == 201

    return {
        **framework_setup,
        "main_process_id": main_process_id,
        "person_id": person_id,
        "passport_id": passport_id,
        "individual_process_id": response.json()["id"],
    }
