from datetime import UTC, datetime
from unittest.mock import AsyncMock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.db.helpers import DatabaseError
from app.features.contacts.api.router import feedback_router
from app.features.contacts.api.router import router as contacts_router
from app.features.contacts.repository import ContactRepository

CONTACT = {
    "id": "c-1",
    "firstName": "Ama",
    "lastName": "Mensah",
    "phone": "+233201234567",
    "contactType": "first timer",
    "serviceType": "sunday service",
    "district": "Central",
    "createdAt": datetime(2026, 10, 11, 9, 0, tzinfo=UTC),
}

NEW_CONTACT = {
    "firstName": "Ama",
    "lastName": "Mensah",
    "phone": "+233 20 123 4567",
    "contactType": "first timer",
    "serviceType": "sunday service",
    "district": "Central",
}


def _create_client(apply_auth_override) -> TestClient:
    app = FastAPI()
    apply_auth_override(app)
    app.include_router(contacts_router)
    app.include_router(feedback_router)
    return TestClient(app)


def test_create_contact(monkeypatch, apply_auth_override):
    monkeypatch.setattr(ContactRepository, "insert_contact", AsyncMock(return_value=CONTACT))

    response = _create_client(apply_auth_override).post("/api/contacts", json=NEW_CONTACT)

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Contact added successfully"
    assert data["data"][0]["id"] == "c-1"
    assert data["data"][0]["createdAt"].startswith("2026-10-11T09:00:00")


def test_create_contact_validation_error(monkeypatch, apply_auth_override):
    insert = AsyncMock()
    monkeypatch.setattr(ContactRepository, "insert_contact", insert)

    response = _create_client(apply_auth_override).post(
        "/api/contacts", json={**NEW_CONTACT, "phone": "12"}
    )

    assert response.status_code == 422
    insert.assert_not_awaited()


def test_create_contact_database_error(monkeypatch, apply_auth_override):
    failing = AsyncMock(side_effect=DatabaseError("Query failed: duplicate key", "fetch_one"))
    monkeypatch.setattr(ContactRepository, "insert_contact", failing)

    response = _create_client(apply_auth_override).post("/api/contacts", json=NEW_CONTACT)

    assert response.status_code == 500
    assert response.json() == {"detail": "Query failed: duplicate key"}


def test_list_contacts(monkeypatch, apply_auth_override):
    listing = AsyncMock(return_value=([CONTACT], 1))
    monkeypatch.setattr(ContactRepository, "list_contacts", listing)

    response = _create_client(apply_auth_override).get(
        "/api/contacts", params={"search": "ama", "period": "month", "page": 1, "page_size": 5}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["pageSize"] == 5
    assert data["pageCount"] == 1
    assert data["items"][0]["firstName"] == "Ama"
    assert listing.await_args.kwargs["window"] is not None


def test_list_contacts_bad_custom_range(monkeypatch, apply_auth_override):
    monkeypatch.setattr(ContactRepository, "list_contacts", AsyncMock())

    response = _create_client(apply_auth_override).get(
        "/api/contacts", params={"period": "custom", "start": "2026-03-01", "end": "2026-02-01"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Start date must be before or equal to end date."


def test_get_contact_not_found(monkeypatch, apply_auth_override):
    monkeypatch.setattr(ContactRepository, "get_contact", AsyncMock(return_value=None))

    response = _create_client(apply_auth_override).get("/api/contacts/missing")

    assert response.status_code == 404
    assert response.json()["detail"] == "Contact missing not found"


def test_malformed_contact_id_is_not_found(monkeypatch, apply_auth_override):
    invalid_uuid = DatabaseError(
        "Query failed: invalid input syntax for type uuid", "fetch_one", sqlstate="22P02"
    )
    monkeypatch.setattr(ContactRepository, "get_contact", AsyncMock(side_effect=invalid_uuid))
    update = AsyncMock(side_effect=invalid_uuid)
    monkeypatch.setattr(ContactRepository, "update_contact", update)

    client = _create_client(apply_auth_override)

    response = client.get("/api/contacts/not-a-uuid")
    assert response.status_code == 404
    assert response.json()["detail"] == "Contact not-a-uuid not found"

    response = client.put("/api/contacts/not-a-uuid", json={"district": "North"})
    assert response.status_code == 404


def test_update_contact(monkeypatch, apply_auth_override):
    update = AsyncMock(return_value={**CONTACT, "district": "North"})
    monkeypatch.setattr(ContactRepository, "update_contact", update)

    response = _create_client(apply_auth_override).put(
        "/api/contacts/c-1", json={"district": "North", "createdAt": "2020-01-01T00:00:00Z"}
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Contact updated successfully"
    assert response.json()["data"]["district"] == "North"
    update.assert_awaited_once_with("c-1", {"district": "North"})


def test_delete_contact(monkeypatch, apply_auth_override):
    delete = AsyncMock(return_value=True)
    monkeypatch.setattr(ContactRepository, "delete_contact_with_feedback", delete)

    response = _create_client(apply_auth_override).delete("/api/contacts/c-1")

    assert response.status_code == 200
    assert response.json()["message"] == "Contact deleted successfully"
    delete.assert_awaited_once_with("c-1")


def test_delete_missing_contact(monkeypatch, apply_auth_override):
    monkeypatch.setattr(
        ContactRepository, "delete_contact_with_feedback", AsyncMock(return_value=False)
    )

    response = _create_client(apply_auth_override).delete("/api/contacts/missing")

    assert response.status_code == 404


def test_add_feedback(monkeypatch, apply_auth_override):
    note = {
        "id": 7,
        "contact_id": "c-1",
        "feedback": "Visited at home",
        "initiator": "Pastor Kwame",
        "date_created": datetime(2026, 10, 12, 18, 0, tzinfo=UTC),
    }
    monkeypatch.setattr(ContactRepository, "get_contact", AsyncMock(return_value=CONTACT))
    monkeypatch.setattr(ContactRepository, "insert_feedback", AsyncMock(return_value=note))

    response = _create_client(apply_auth_override).post(
        "/api/feedbacks",
        json={
            "contact_id": "c-1",
            "feedback": "Visited at home",
            "initiator": "Pastor Kwame",
            "date_created": "2026-10-12T18:00:00Z",
        },
    )

    assert response.status_code == 201
    assert response.json()["id"] == 7


def test_contact_feedback_listing(monkeypatch, apply_auth_override):
    notes = [{"id": 7, "contact_id": "c-1", "feedback": "Visited", "initiator": "Pastor"}]
    monkeypatch.setattr(ContactRepository, "get_contact", AsyncMock(return_value=CONTACT))
    monkeypatch.setattr(ContactRepository, "list_feedback", AsyncMock(return_value=notes))

    response = _create_client(apply_auth_override).get("/api/feedbacks/c-1")

    assert response.status_code == 200
    data = response.json()
    assert data["firstName"] == "Ama"
    assert data["feedback"] == notes
