"""
Notekeeper Backend — /notes Endpoint Tests
============================================

What:  End-to-end HTTP tests for list/create/update/delete.
How:   HTTPX AsyncClient over ASGITransport; the app's repository dependency
       is overridden with the in-memory repository (see conftest.py).
"""

import logging
import uuid

import pytest

from app.config import settings
from app.exceptions import DatabaseError
from app.main import app
from app.middleware.logging import access_log_level
from app.repositories import get_note_repository


async def _create(client, user="u1", title="Groceries", text="milk"):
    response = await client.post("/notes", json={"user": user, "title": title, "text": text})
    assert response.status_code == 201
    return response


async def _note_id(repo, title):
    notes = await repo.list_notes()
    return next(str(n.id) for n in notes if n.title == title)


class TestListNotes:

    @pytest.mark.asyncio
    async def test_empty_collection_is_a_client_error(self, test_client):
        response = await test_client.get("/notes")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "not_found"
        assert body["message"] == "No notes found"

    @pytest.mark.asyncio
    async def test_empty_collection_with_404_configured(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "not_found_status_code", 404)

        response = await test_client.get("/notes")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_includes_created_note_with_username(self, test_client):
        await _create(test_client)
        await _create(test_client, user="u2", title="Chores", text="laundry")

        response = await test_client.get("/notes")

        assert response.status_code == 200
        notes = response.json()
        assert [(n["title"], n["text"], n["user"], n["username"]) for n in notes] == [
            ("Groceries", "milk", "u1", "alice"),
            ("Chores", "laundry", "u2", "bob"),
        ]
        assert notes[0]["completed"] is False
        uuid.UUID(notes[0]["id"])

    @pytest.mark.asyncio
    async def test_database_failure_returns_generic_500(self, test_client, mock_repo):
        mock_repo.list_notes.side_effect = DatabaseError(context={"error_type": "OperationalError"})
        app.dependency_overrides[get_note_repository] = lambda: mock_repo

        response = await test_client.get("/notes")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "OperationalError" not in response.text


class TestCreateNote:

    @pytest.mark.asyncio
    async def test_create_returns_201_with_message(self, test_client):
        response = await _create(test_client)

        assert response.json() == {"message": "New note Groceries created"}

    @pytest.mark.asyncio
    async def test_duplicate_in_any_case_is_409(self, test_client):
        await _create(test_client)

        response = await test_client.post(
            "/notes", json={"user": "u1", "title": "groceries", "text": "MILK"}
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Duplicate note"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body, message",
        [
            ({"title": "t", "text": "x"}, "User field is required"),
            ({"user": "u1", "text": "x"}, "Title field is required"),
            ({"user": "u1", "title": "t"}, "Text field is required"),
            ({"user": "u1", "title": "", "text": ""}, "Title field is required"),
        ],
    )
    async def test_missing_field_is_400(self, test_client, body, message):
        response = await test_client.post("/notes", json=body)

        assert response.status_code == 400
        assert response.json()["message"] == message
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_no_body_is_400(self, test_client):
        response = await test_client.post("/notes")

        assert response.status_code == 400
        assert response.json()["message"] == "User field is required"

    @pytest.mark.asyncio
    async def test_malformed_body_is_400(self, test_client):
        response = await test_client.post(
            "/notes", content=b"[1, 2]", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid note data received"


class TestUpdateNote:

    @pytest.mark.asyncio
    async def test_update_to_own_values_succeeds(self, test_client, memory_repo):
        await _create(test_client)
        note_id = await _note_id(memory_repo, "Groceries")

        response = await test_client.patch(
            "/notes",
            json={"id": note_id, "user": "u1", "title": "Groceries", "text": "milk", "completed": True},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Groceries updated"}
        listed = (await test_client.get("/notes")).json()
        assert listed[0]["completed"] is True

    @pytest.mark.asyncio
    async def test_update_to_other_note_values_is_409(self, test_client, memory_repo):
        await _create(test_client)
        await _create(test_client, title="Chores", text="laundry")
        chores_id = await _note_id(memory_repo, "Chores")

        response = await test_client.patch(
            "/notes",
            json={"id": chores_id, "user": "u1", "title": "Groceries", "text": "milk", "completed": False},
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    @pytest.mark.parametrize("completed", ["false", None, 0])
    async def test_non_boolean_completed_is_400(self, test_client, memory_repo, completed):
        await _create(test_client)
        note_id = await _note_id(memory_repo, "Groceries")

        response = await test_client.patch(
            "/notes",
            json={"id": note_id, "user": "u1", "title": "Groceries", "text": "milk", "completed": completed},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required"

    @pytest.mark.asyncio
    async def test_unknown_note_is_400(self, test_client):
        response = await test_client.patch(
            "/notes",
            json={"id": str(uuid.uuid4()), "user": "u1", "title": "t", "text": "x", "completed": False},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "User not found"

    @pytest.mark.asyncio
    async def test_unknown_note_with_404_configured(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "not_found_status_code", 404)

        response = await test_client.patch(
            "/notes",
            json={"id": str(uuid.uuid4()), "user": "u1", "title": "t", "text": "x", "completed": False},
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Note not found"


class TestDeleteNote:

    @pytest.mark.asyncio
    async def test_delete_existing_note(self, test_client, memory_repo):
        await _create(test_client)
        await _create(test_client, title="Chores", text="laundry")
        note_id = await _note_id(memory_repo, "Groceries")

        response = await test_client.request("DELETE", "/notes", json={"id": note_id})

        assert response.status_code == 200
        assert response.json() == f"Note Groceries with ID {note_id} deleted"
        titles = [n["title"] for n in (await test_client.get("/notes")).json()]
        assert titles == ["Chores"]

    @pytest.mark.asyncio
    async def test_delete_unknown_id_is_400(self, test_client):
        response = await test_client.request("DELETE", "/notes", json={"id": str(uuid.uuid4())})

        assert response.status_code == 400
        assert response.json()["message"] == "User not found"

    @pytest.mark.asyncio
    async def test_delete_without_id_is_400(self, test_client):
        response = await test_client.request("DELETE", "/notes", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "Note ID Required"


class TestCrossCutting:

    @pytest.mark.asyncio
    async def test_request_id_header_is_echoed(self, test_client):
        response = await test_client.get("/notes", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"
        assert response.json()["request_id"] == "abc12345"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/health")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_reports_unreachable_database(self, test_client, mock_repo):
        mock_repo.ping.return_value = False
        app.dependency_overrides[get_note_repository] = lambda: mock_repo

        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_expected_rejection_logs_at_info(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="notekeeper.access")
        await _create(test_client)

        response = await test_client.post(
            "/notes", json={"user": "u1", "title": "Groceries", "text": "milk"}
        )

        assert response.status_code == 409
        records = [r for r in caplog.records if r.name == "notekeeper.access" and r.status == 409]
        assert [r.levelno for r in records] == [logging.INFO]

    @pytest.mark.asyncio
    async def test_unknown_route_logs_at_warning(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="notekeeper.access")

        response = await test_client.get("/nowhere")

        assert response.status_code == 404
        records = [r for r in caplog.records if r.name == "notekeeper.access"]
        assert [r.levelno for r in records] == [logging.WARNING]

    @pytest.mark.asyncio
    async def test_server_error_logs_at_error(self, test_client, mock_repo, caplog):
        caplog.set_level(logging.INFO, logger="notekeeper.access")
        mock_repo.list_notes.side_effect = DatabaseError()
        app.dependency_overrides[get_note_repository] = lambda: mock_repo

        response = await test_client.get("/notes")

        assert response.status_code == 500
        records = [r for r in caplog.records if r.name == "notekeeper.access"]
        assert [(r.status, r.levelno) for r in records] == [(500, logging.ERROR)]

    def test_not_found_level_follows_status_switch(self, monkeypatch):
        assert access_log_level(404) == logging.WARNING

        monkeypatch.setattr(settings, "not_found_status_code", 404)

        assert access_log_level(404) == logging.INFO
        assert access_log_level(200) == logging.INFO
