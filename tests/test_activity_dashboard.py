"""Test the activity log and dashboard summaries."""

from datetime import date, timedelta

import pytest

from conftest import auth

PATH_TO_COMPLETED = [
    "documents_submitted",
    "documents_approved",
    "preparing_submission",
    "submitted_to_government",
    "under_government_review",
    "government_approved",
    "completed",
]


async def upload(client, user, process_id, document_type_id, content):
    return await client.post(
        f"/individual-processes/{process_id}/documents",
        files={"file": ("scan.pdf", content, "application/pdf")},
        data={"document_type_id": document_type_id},
        headers=auth(user),
    )


@pytest.mark.asyncio
async def test_request_approval_is_logged(client, admin_user, client_user, contact_person):
    response = await client.post("/process-types", json={"name": "Work visa"}, headers=auth(admin_user))
    process_type_id = response.json()["id"]
    response = await client.post(
        "/process-requests",
        json={
            "contact_person_id": contact_person.id,
            "process_type_id": process_type_id,
            "workplace_city": "Macaé",
            "request_date": "2025-05-20",
        },
        headers=auth(client_user),
    )
    request_id = response.json()["id"]
    main_process = (await client.post(f"/process-requests/{request_id}/approve", headers=auth(admin_user))).json()

    response = await client.get(
        "/activity-logs", params={"entity_type": "process_request"}, headers=auth(admin_user)
    )

    assert response.status_code == 200
    page = response.json()
    assert page["total"] == 1
    assert page["has_more"] is False
    entry = page["logs"][0]
    assert entry["action"] == "approved"
    assert entry["entity_id"] == request_id
    assert entry["user_id"] == admin_user.id
    assert entry["user"]["full_name"] == "Admin"
    assert entry["details"]["reference_number"] == main_process["reference_number"]


@pytest.mark.asyncio
async def test_status_changes_show_in_entity_history(client, admin_user, individual_process):
    process_id = individual_process["individual_process_id"]
    await client.post(
        f"/individual-processes/{process_id}/status",
        json={"status": "documents_submitted", "notes": "All files in"},
        headers=auth(admin_user),
    )

    response = await client.get(f"/activity-logs/individual_process/{process_id}", headers=auth(admin_user))

    logs = response.json()["logs"]
    assert {entry["action"] for entry in logs} == {"created", "status_changed"}
    change = next(entry for entry in logs if entry["action"] == "status_changed")
    assert change["details"] == {
        "previous_status": "pending_documents",
        "new_status": "documents_submitted",
        "notes": "All files in",
    }


@pytest.mark.asyncio
async def test_clients_only_see_their_own_activity(client, admin_user, client_user, individual_process):
    process_id = individual_process["individual_process_id"]
    document = (await upload(client, client_user, process_id, individual_process["passport_type_id"], b"p")).json()
    await client.post(f"/documents/{document['id']}/review", json={"status": "approved"}, headers=auth(admin_user))

    response = await client.get("/activity-logs", headers=auth(client_user))
    page = response.json()
    assert page["total"] == 1
    assert page["logs"][0]["action"] == "uploaded"
    assert page["logs"][0]["entity_type"] == "delivered_document"
    assert page["logs"][0]["user_id"] == client_user.id

    response = await client.get(f"/activity-logs/delivered_document/{document['id']}", headers=auth(admin_user))
    assert {entry["action"] for entry in response.json()["logs"]} == {"uploaded", "approved"}

    response = await client.get("/activity-logs", params={"limit": 1}, headers=auth(admin_user))
    page = response.json()
    assert len(page["logs"]) == 1
    assert page["total"] == 3
    assert page["has_more"] is True


@pytest.mark.asyncio
async def test_activity_logs_require_a_user(client, database):
    response = await client.get("/activity-logs")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_process_stats(client, admin_user, client_user, other_client_user, individual_process):
    response = await client.get("/dashboard/stats", headers=auth(client_user))
    assert response.json() == {
        "total": 1,
        "status_counts": {"pending_documents": 1},
        "status_percentages": {"pending_documents": 100.0},
    }

    response = await client.get("/dashboard/stats", headers=auth(other_client_user))
    assert response.json() == {"total": 0, "status_counts": {}, "status_percentages": {}}


@pytest.mark.asyncio
async def test_upcoming_deadlines(client, admin_user, client_user, other_client_user, individual_process):
    process_id = individual_process["individual_process_id"]
    deadline = date.today() + timedelta(days=10)
    await client.patch(
        f"/individual-processes/{process_id}",
        json={"deadline_date": deadline.isoformat()},
        headers=auth(admin_user),
    )

    response = await client.get("/dashboard/upcoming-deadlines", headers=auth(client_user))
    assert response.status_code == 200
    [item] = response.json()
    assert item["individual_process_id"] == process_id
    assert item["deadline_date"] == deadline.isoformat()
    assert item["days_remaining"] == 10
    assert item["person_name"] == "John Smith"
    assert item["reference_number"].startswith("PR-")

    response = await client.get("/dashboard/upcoming-deadlines", headers=auth(other_client_user))
    assert response.json() == []

    await client.patch(
        f"/individual-processes/{process_id}",
        json={"deadline_date": (date.today() + timedelta(days=40)).isoformat()},
        headers=auth(admin_user),
    )
    response = await client.get("/dashboard/upcoming-deadlines", headers=auth(admin_user))
    assert response.json() == []


@pytest.mark.asyncio
async def test_review_queue(client, admin_user, client_user, individual_process):
    process_id = individual_process["individual_process_id"]
    document = (await upload(client, client_user, process_id, individual_process["passport_type_id"], b"p")).json()

    response = await client.get("/dashboard/review-queue", headers=auth(admin_user))
    [item] = response.json()
    assert item["id"] == document["id"]
    assert item["document_type_name"] == "Passport"
    assert item["person_name"] == "John Smith"
    assert item["status"] == "uploaded"

    await client.post(f"/documents/{document['id']}/review", json={"status": "approved"}, headers=auth(admin_user))
    response = await client.get("/dashboard/review-queue", headers=auth(admin_user))
    assert response.json() == []

    response = await client.get("/dashboard/review-queue", headers=auth(client_user))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_completion_rate(client, admin_user, individual_process):
    response = await client.get("/dashboard/completion-rate", headers=auth(admin_user))
    assert response.json() == {
        "total_processes": 1,
        "completed_processes": 0,
        "completion_rate": 0.0,
        "average_days_to_complete": 0,
    }

    process_id = individual_process["individual_process_id"]
    for status in PATH_TO_COMPLETED:
        response = await client.post(
            f"/individual-processes/{process_id}/status", json={"status": status}, headers=auth(admin_user)
        )
        assert response.status_code == 200

    response = await client.get("/dashboard/completion-rate", headers=auth(admin_user))
    assert response.json()["completed_processes"] == 1
    assert response.json()["completion_rate"] == 100.0
    assert response.json()["average_days_to_complete"] == 0


@pytest.mark.asyncio
async def test_document_status_per_person(client, admin_user, client_user, other_client_user, individual_process):
    response = await client.get("/dashboard/document-status", headers=auth(client_user))
    [person] = response.json()
    assert person["person_name"] == "John Smith"
    assert (person["pending"], person["under_review"], person["total"]) == (2, 0, 2)

    process_id = individual_process["individual_process_id"]
    await upload(client, client_user, process_id, individual_process["passport_type_id"], b"p")

    response = await client.get("/dashboard/document-status", headers=auth(client_user))
    [person] = response.json()
    assert (person["pending"], person["under_review"], person["total"]) == (1, 1, 2)

    response = await client.get("/dashboard/document-status", headers=auth(other_client_user))
    assert response.json() == []
