"""Test delivered document uploads, versioning, review and conditions."""

from datetime import date, timedelta
from pathlib import Path

import pytest

from casework.core.config import settings
from conftest import auth


async def upload(client, user, process_id, document_type_id, content, filename="scan.pdf", **dates):
    return await client.post(
        f"/individual-processes/{process_id}/documents",
        files={"file": (filename, content, "application/pdf")},
        data={"document_type_id": document_type_id, **dates},
        headers=auth(user),
    )


def checklist_item(checklist, label):
    return next(item for item in checklist["items"] if item["label"] == label)


@pytest.mark.asyncio
async def test_first_upload_fills_placeholder(client, admin_user, individual_process):
    process_id = individual_process["individual_process_id"]
    expiry = (date.today() + timedelta(days=3650)).isoformat()

    response = await upload(
        client, admin_user, process_id, individual_process["passport_type_id"],
        b"%PDF-1.4 passport scan", filename="passport.pdf", expiry_date=expiry,
    )

    assert response.status_code == 201
    document = response.json()
    assert document["status"] == "uploaded"
    assert document["version"] == 1
    assert document["is_latest"] is True
    assert document["filename"] == "passport.pdf"
    assert document["mime_type"] == "application/pdf"
    assert len(document["sha256"]) == 64
    assert document["expiry_date"] == expiry
    assert document["uploaded_by"] == admin_user.id

    stored = Path(settings.BUCKET_DIR) / process_id / f"{document['sha256']}.pdf"
    assert stored.read_bytes() == b"%PDF-1.4 passport scan"

    # Same record as the placeholder, no extra row
    response = await client.get(
        f"/individual-processes/{process_id}/documents",
        params={"document_type_id": individual_process["passport_type_id"]},
        headers=auth(admin_user),
    )
    assert [d["id"] for d in response.json()] == [document["id"]]

    response = await client.get(f"/individual-processes/{process_id}/checklist", headers=auth(admin_user))
    passport_item = checklist_item(response.json(), "Passport")
    assert passport_item["completion_status"] == "completed"
    assert passport_item["document"]["validity_check"]["status"] == "valid"


@pytest.mark.asyncio
async def test_second_upload_creates_new_version(client, admin_user, individual_process):
    process_id = individual_process["individual_process_id"]
    type_id = individual_process["passport_type_id"]

    first = (await upload(client, admin_user, process_id, type_id, b"version one")).json()
    second = await upload(client, admin_user, process_id, type_id, b"version two")

    assert second.status_code == 201
    assert second.json()["version"] == 2
    assert second.json()["is_latest"] is True

    response = await client.get(f"/documents/{first['id']}", headers=auth(admin_user))
    assert response.json()["is_latest"] is False

    response = await client.get(
        f"/individual-processes/{process_id}/documents",
        params={"document_type_id": type_id},
        headers=auth(admin_user),
    )
    assert [d["version"] for d in response.json()] == [2, 1]


@pytest.mark.asyncio
async def test_duplicate_file_in_same_process_is_409(client, admin_user, individual_process):
    process_id = individual_process["individual_process_id"]

    response = await upload(client, admin_user, process_id, individual_process["passport_type_id"], b"same bytes")
    assert response.status_code == 201

    response = await upload(client, admin_user, process_id, individual_process["criminal_type_id"], b"same bytes")
    assert response.status_code == 409
    assert "already exists" in response.json()["detail"]


@pytest.mark.asyncio
async def test_rejected_file_types_and_sizes(client, admin_user, individual_process, monkeypatch):
    process_id = individual_process["individual_process_id"]
    type_id = individual_process["passport_type_id"]

    response = await upload(client, admin_user, process_id, type_id, b"MZ", filename="setup.exe")
    assert response.status_code == 400

    response = await upload(client, admin_user, process_id, type_id, b"")
    assert response.status_code == 400

    monkeypatch.setattr(settings, "MAX_FILE_SIZE", 10)
    response = await upload(client, admin_user, process_id, type_id, b"more than ten bytes")
    assert response.status_code == 413


@pytest.mark.asyncio
async def test_unknown_document_type_is_404(client, admin_user, individual_process):
    response = await upload(client, admin_user, individual_process["individual_process_id"], "missing", b"x")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_conditions_and_validity_drive_completion(client, admin_user, individual_process):
    process_id = individual_process["individual_process_id"]
    headers = auth(admin_user)

    issued = (date.today() - timedelta(days=10)).isoformat()
    document = (await upload(
        client, admin_user, process_id, individual_process["criminal_type_id"], b"record", issue_date=issued
    )).json()

    response = await client.get(f"/documents/{document['id']}/conditions", headers=headers)
    conditions = response.json()
    assert len(conditions) == 1
    assert conditions[0]["is_fulfilled"] is False

    response = await client.get(f"/individual-processes/{process_id}/checklist", headers=headers)
    item = checklist_item(response.json(), "Criminal record")
    assert item["completion_status"] == "partial"
    assert item["document"]["conditions"] == [{"name": "Apostilled", "is_fulfilled": False, "expires_at": None}]

    response = await client.patch(
        f"/documents/{document['id']}/conditions/{individual_process['condition_id']}",
        json={"is_fulfilled": True},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["fulfilled_by"] == admin_user.id
    assert response.json()["fulfilled_at"] is not None

    response = await client.get(f"/individual-processes/{process_id}/checklist", headers=headers)
    assert checklist_item(response.json(), "Criminal record")["completion_status"] == "completed"


@pytest.mark.asyncio
async def test_old_document_fails_max_age(client, admin_user, individual_process):
    process_id = individual_process["individual_process_id"]
    issued = (date.today() - timedelta(days=100)).isoformat()

    await upload(client, admin_user, process_id, individual_process["criminal_type_id"], b"old", issue_date=issued)

    response = await client.get(f"/individual-processes/{process_id}/checklist", headers=auth(admin_user))
    item = checklist_item(response.json(), "Criminal record")
    assert item["document"]["validity_check"] == {
        "status": "expired",
        "message_key": "validity.maxAgeExceeded",
        "days_value": 10,
    }
    assert item["completion_status"] == "partial"


@pytest.mark.asyncio
async def test_review(client, admin_user, client_user, individual_process):
    process_id = individual_process["individual_process_id"]
    document = (await upload(client, admin_user, process_id, individual_process["passport_type_id"], b"p")).json()

    response = await client.post(
        f"/documents/{document['id']}/review", json={"status": "rejected"}, headers=auth(admin_user)
    )
    assert response.status_code == 422

    response = await client.post(
        f"/documents/{document['id']}/review", json={"status": "approved"}, headers=auth(client_user)
    )
    assert response.status_code == 403

    response = await client.post(
        f"/documents/{document['id']}/review",
        json={"status": "rejected", "rejection_reason": "Illegible scan"},
        headers=auth(admin_user),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    assert response.json()["rejection_reason"] == "Illegible scan"
    assert response.json()["reviewed_by"] == admin_user.id


@pytest.mark.asyncio
async def test_placeholder_cannot_be_reviewed(client, admin_user, individual_process):
    process_id = individual_process["individual_process_id"]
    response = await client.get(f"/individual-processes/{process_id}/documents", headers=auth(admin_user))
    placeholder_id = response.json()[0]["id"]

    response = await client.post(
        f"/documents/{placeholder_id}/review", json={"status": "approved"}, headers=auth(admin_user)
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_clients_upload_only_to_own_company(client, client_user, other_client_user, individual_process):
    process_id = individual_process["individual_process_id"]

    response = await upload(client, client_user, process_id, individual_process["passport_type_id"], b"mine")
    assert response.status_code == 201

    response = await upload(client, other_client_user, process_id, individual_process["passport_type_id"], b"x")
    assert response.status_code == 403

    response = await client.get(f"/individual-processes/{process_id}/documents", headers=auth(other_client_user))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_condition_patch_keeps_fields_not_sent(client, admin_user, individual_process):
    process_id = individual_process["individual_process_id"]
    headers = auth(admin_user)
    document = (await upload(client, admin_user, process_id, individual_process["criminal_type_id"], b"rec")).json()
    url = f"/documents/{document['id']}/conditions/{individual_process['condition_id']}"

    response = await client.patch(
        url, json={"is_fulfilled": False, "expires_at": "2030-01-01", "notes": "Apostille pending"}, headers=headers
    )
    assert response.status_code == 200

    response = await client.patch(url, json={"is_fulfilled": True}, headers=headers)
    assert response.status_code == 200
    condition = response.json()
    assert condition["is_fulfilled"] is True
    assert condition["expires_at"] == "2030-01-01"
    assert condition["notes"] == "Apostille pending"

    response = await client.patch(url, json={"is_fulfilled": True, "expires_at": None}, headers=headers)
    assert response.json()["expires_at"] is None
    assert response.json()["notes"] == "Apostille pending"
