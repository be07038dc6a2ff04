"""Test tasks and the CSV and Excel exports."""

import csv
import io
from datetime import date, timedelta

import pytest
from openpyxl import load_workbook

from casework.services.export_service import EXPORT_COLUMNS
from conftest import auth


@pytest.mark.asyncio
async def test_task_lifecycle(client, admin_user, individual_process):
    headers = auth(admin_user)

    response = await client.post(
        "/tasks",
        json={
            "individual_process_id": individual_process["individual_process_id"],
            "title": "Book consulate appointment",
            "priority": "high",
            "assigned_to": admin_user.id,
        },
        headers=headers,
    )
    assert response.status_code == 201
    task = response.json()
    assert task["status"] == "todo"
    assert task["created_by"] == admin_user.id

    response = await client.patch(f"/tasks/{task['id']}", json={"status": "completed"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["completed_at"] is not None
    assert response.json()["completed_by"] == admin_user.id

    response = await client.patch(f"/tasks/{task['id']}", json={"status": "in_progress"}, headers=headers)
    assert response.json()["completed_at"] is None
    assert response.json()["completed_by"] is None

    response = await client.get("/tasks", params={"status": "in_progress"}, headers=headers)
    assert [t["id"] for t in response.json()] == [task["id"]]

    response = await client.delete(f"/tasks/{task['id']}", headers=headers)
    assert response.status_code == 204


@pytest.mark.asyncio
async def test_task_needs_a_process(client, admin_user, database):
    response = await client.post("/tasks", json={"title": "Orphan task"}, headers=auth(admin_user))
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_overdue_tasks(client, admin_user, individual_process):
    headers = auth(admin_user)
    process_id = individual_process["individual_process_id"]
    yesterday = (date.today() - timedelta(days=1)).isoformat()
    tomorrow = (date.today() + timedelta(days=1)).isoformat()

    ids = {}
    for title, due_date in [("late", yesterday), ("upcoming", tomorrow), ("late but done", yesterday)]:
        response = await client.post(
            "/tasks",
            json={"individual_process_id": process_id, "title": title, "due_date": due_date},
            headers=headers,
        )
        ids[title] = response.json()["id"]

    await client.patch(f"/tasks/{ids['late but done']}", json={"status": "completed"}, headers=headers)

    response = await client.get("/tasks/overdue", headers=headers)
    assert [t["id"] for t in response.json()] == [ids["late"]]
    assert response.json()[0]["is_overdue"] is True

    response = await client.get(f"/tasks/{ids['upcoming']}", headers=headers)
    assert response.json()["is_overdue"] is False


@pytest.mark.asyncio
async def test_tasks_are_admin_only(client, client_user, database):
    response = await client.get("/tasks", headers=auth(client_user))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_export_individual_processes(client, admin_user, client_user, other_client_user, individual_process):
    process_id = individual_process["individual_process_id"]
    await client.patch(
        f"/individual-processes/{process_id}",
        json={"protocol_number": "47039.001234/2025-11", "deadline_date": "2025-12-31"},
        headers=auth(admin_user),
    )

    response = await client.get("/exports/individual-processes.csv", headers=auth(client_user))

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    rows = list(csv.DictReader(io.StringIO(response.text)))
    assert len(rows) == 1
    row = rows[0]
    assert row["person"] == "John Smith"
    assert row["company"] == "Acme Offshore Ltda"
    assert row["status"] == "pending_documents"
    assert row["legal_framework"] == "RN 02 - Technical assistance"
    assert row["government_status"] == "submitted"
    assert row["government_progress"] == "60"
    assert row["protocol_number"] == "47039.001234/2025-11"
    assert row["deadline_date"] == "2025-12-31"

    response = await client.get("/exports/individual-processes.csv", headers=auth(other_client_user))
    assert list(csv.DictReader(io.StringIO(response.text))) == []


@pytest.mark.asyncio
async def test_export_individual_processes_xlsx(client, admin_user, client_user, other_client_user, individual_process):
    response = await client.get("/exports/individual-processes.xlsx", headers=auth(client_user))

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert 'filename="individual-processes.xlsx"' in response.headers["content-disposition"]

    sheet = load_workbook(io.BytesIO(response.content)).active
    rows = list(sheet.iter_rows(values_only=True))
    assert list(rows[0]) == EXPORT_COLUMNS
    assert len(rows) == 2
    row = dict(zip(EXPORT_COLUMNS, rows[1]))
    assert row["person"] == "John Smith"
    assert row["company"] == "Acme Offshore Ltda"
    assert row["status"] == "pending_documents"

    response = await client.get("/exports/individual-processes.xlsx", headers=auth(other_client_user))
    rows = list(load_workbook(io.BytesIO(response.content)).active.iter_rows(values_only=True))
    assert [list(r) for r in rows] == [EXPORT_COLUMNS]
