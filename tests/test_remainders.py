# tests/test_remainders.py
"""Tests for remainder create, read, update and delete endpoints."""

import uuid
from datetime import datetime
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from remainder_service.models import Remainder
from tests.conftest import create_remainder, days_from_today, make_payload


def stored_count(session: Session) -> int:
    """Number of remainder rows currently in the database."""
    return session.execute(select(func.count(Remainder.id))).scalar() or 0


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp from a response body."""
    return datetime.fromisoformat(value)


class TestCreateRemainder:
    """Tests for POST /api/remainders."""

    def test_create_returns_201_with_envelope(
        self, client: TestClient, payload: dict[str, Any]
    ) -> None:
        """A valid payload is stored and echoed back in the envelope."""
        response = client.post("/api/remainders", json=payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Remainder created successfully"

        data = body["data"]
        uuid.UUID(data["id"])
        assert data["name"] == payload["name"]
        assert data["phone"] == payload["phone"]
        assert data["occasion"] == "birthday"
        assert data["relationship"] == "friend"
        assert data["date"] == payload["date"]
        assert data["time"] == "09:30"
        assert data["isActive"] is True
        assert "createdAt" in data
        assert "updatedAt" in data

    def test_create_lower_cases_email(
        self, client: TestClient, db_session: Session
    ) -> None:
        """The stored email is the lower-cased input."""
        data = create_remainder(client, email="Mixed.Case@Example.COM")

        assert data["email"] == "mixed.case@example.com"
        stored = db_session.get(Remainder, uuid.UUID(data["id"]))
        assert stored is not None
        assert stored.email == "mixed.case@example.com"

    def test_create_trims_strings(self, client: TestClient) -> None:
        """Surrounding whitespace is removed from text fields."""
        data = create_remainder(client, name="  Bob  ", phone=" +15550000000 ")

        assert data["name"] == "Bob"
        assert data["phone"] == "+15550000000"

    @pytest.mark.parametrize(
        "field", ["name", "email", "phone", "occasion", "date", "time", "relationship"]
    )
    def test_missing_field_rejected(
        self, client: TestClient, db_session: Session, field: str
    ) -> None:
        """Omitting any field yields 400 naming it, and nothing is stored."""
        payload = make_payload()
        del payload[field]

        response = client.post("/api/remainders", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation errors"
        assert [e["field"] for e in body["errors"]] == [field]
        assert stored_count(db_session) == 0

    @pytest.mark.parametrize(
        "field,value",
        [("occasion", "graduation"), ("relationship", "cousin")],
    )
    def test_unknown_enum_rejected(
        self, client: TestClient, db_session: Session, field: str, value: str
    ) -> None:
        """Values outside the enumerated sets are rejected."""
        response = client.post("/api/remainders", json=make_payload(**{field: value}))

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert errors[0]["field"] == field
        assert errors[0]["value"] == value
        assert stored_count(db_session) == 0

    def test_past_date_rejected(self, client: TestClient) -> None:
        """Yesterday's date fails with the past-date message."""
        response = client.post(
            "/api/remainders", json=make_payload(date=days_from_today(-1))
        )

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert len(errors) == 1
        assert errors[0]["field"] == "date"
        assert errors[0]["location"] == "body"
        assert errors[0]["message"] == "Date cannot be in the past"

    def test_today_accepted(self, client: TestClient) -> None:
        """A remainder may be dated today."""
        data = create_remainder(client, date=days_from_today(0))
        assert data["date"] == days_from_today(0).isoformat()

    def test_invalid_date_string_rejected(self, client: TestClient) -> None:
        """Unparseable dates are reported on the date field."""
        response = client.post("/api/remainders", json=make_payload(date="31/12/2030"))

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "date"

    @pytest.mark.parametrize("value", [4102444800, "4102444800"])
    def test_numeric_date_rejected(
        self, client: TestClient, db_session: Session, value: object
    ) -> None:
        """Unix timestamps are not accepted in place of a calendar date."""
        response = client.post("/api/remainders", json=make_payload(date=value))

        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["field"] == "date"
        assert error["message"] == "Please enter a valid date"
        assert stored_count(db_session) == 0

    @pytest.mark.parametrize(
        "field,value",
        [("time", "1\u0663:30"), ("phone", "+1\u0665\u0665\u0665")],
    )
    def test_non_ascii_digits_rejected(
        self, client: TestClient, db_session: Session, field: str, value: str
    ) -> None:
        """Digits from other scripts are not accepted in time or phone."""
        response = client.post("/api/remainders", json=make_payload(**{field: value}))

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == [field]
        assert stored_count(db_session) == 0

    def test_all_errors_returned_together(self, client: TestClient) -> None:
        """Several bad fields produce one entry each in a single response."""
        response = client.post(
            "/api/remainders",
            json=make_payload(email="bad", phone="abc", time="7pm"),
        )

        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert fields == {"email", "phone", "time"}

    def test_malformed_json_rejected(self, client: TestClient) -> None:
        """A body that is not JSON is a 400, not a 500."""
        response = client.post(
            "/api/remainders",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestGetRemainder:
    """Tests for GET /api/remainders/{id}."""

    def test_get_existing(self, client: TestClient) -> None:
        """A stored remainder is returned by its id."""
        created = create_remainder(client)

        response = client.get(f"/api/remainders/{created['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Remainder retrieved successfully"
        assert body["data"] == created

    def test_get_unknown_id_is_404(self, client: TestClient) -> None:
        """A well-formed id with no record is a 404."""
        response = client.get(f"/api/remainders/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Remainder not found",
        }

    def test_get_malformed_id_is_400(self, client: TestClient) -> None:
        """A malformed id is rejected as a validation error, never 404."""
        response = client.get("/api/remainders/not-a-valid-id")

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation errors"
        assert body["errors"][0]["field"] == "id"
        assert body["errors"][0]["message"] == "Invalid remainder ID"


class TestUpdateRemainder:
    """Tests for PUT /api/remainders/{id}."""

    def test_update_replaces_every_field(self, client: TestClient) -> None:
        """All write fields change; id and createdAt are kept."""
        created = create_remainder(client)
        replacement = make_payload(
            name="Bob",
            email="BOB@Example.com",
            phone="+442071234567",
            occasion="meeting",
            date=days_from_today(10),
            time="17:45",
            relationship="colleague",
        )

        response = client.put(f"/api/remainders/{created['id']}", json=replacement)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Remainder updated successfully"
        data = body["data"]
        assert data["id"] == created["id"]
        assert data["createdAt"] == created["createdAt"]
        assert parse_timestamp(data["updatedAt"]) > parse_timestamp(
            created["updatedAt"]
        )
        assert data["name"] == "Bob"
        assert data["email"] == "bob@example.com"
        assert data["phone"] == "+442071234567"
        assert data["occasion"] == "meeting"
        assert data["date"] == replacement["date"]
        assert data["time"] == "17:45"
        assert data["relationship"] == "colleague"
        assert data["isActive"] is True

        fetched = client.get(f"/api/remainders/{created['id']}").json()["data"]
        assert fetched == data

    def test_update_requires_full_payload(self, client: TestClient) -> None:
        """A partial body is rejected rather than applied as a patch."""
        created = create_remainder(client)

        response = client.put(
            f"/api/remainders/{created['id']}", json={"name": "Only name"}
        )

        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert fields == {"email", "phone", "occasion", "date", "time", "relationship"}
        unchanged = client.get(f"/api/remainders/{created['id']}").json()["data"]
        assert unchanged["name"] == "Alice"

    def test_update_rejects_past_date(self, client: TestClient) -> None:
        """Updates follow the same not-in-the-past rule as creates."""
        created = create_remainder(client)

        response = client.put(
            f"/api/remainders/{created['id']}",
            json=make_payload(date=days_from_today(-3)),
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["message"] == "Date cannot be in the past"

    def test_update_unknown_id_is_404(self, client: TestClient) -> None:
        """Updating a missing record is a 404."""
        response = client.put(f"/api/remainders/{uuid.uuid4()}", json=make_payload())

        assert response.status_code == 404
        assert response.json()["message"] == "Remainder not found"

    def test_update_malformed_id_is_400(self, client: TestClient) -> None:
        """A malformed id is a 400 even with a valid body."""
        response = client.put("/api/remainders/12345", json=make_payload())

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "id"

    def test_update_malformed_id_and_body_reported_together(
        self, client: TestClient
    ) -> None:
        """Identifier and body errors are collected into one response."""
        response = client.put(
            "/api/remainders/12345", json=make_payload(time="99:99")
        )

        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert fields == {"id", "time"}


class TestDeleteRemainder:
    """Tests for DELETE /api/remainders/{id}."""

    def test_delete_returns_deleted_record(
        self, client: TestClient, db_session: Session
    ) -> None:
        """Deleting returns the record's data and removes it."""
        created = create_remainder(client)

        response = client.delete(f"/api/remainders/{created['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Remainder deleted successfully"
        assert body["data"]["id"] == created["id"]
        assert body["data"]["name"] == created["name"]
        assert stored_count(db_session) == 0

    def test_get_after_delete_is_404(self, client: TestClient) -> None:
        """A deleted record can no longer be fetched."""
        created = create_remainder(client)
        client.delete(f"/api/remainders/{created['id']}")

        response = client.get(f"/api/remainders/{created['id']}")

        assert response.status_code == 404

    def test_delete_twice_is_404(self, client: TestClient) -> None:
        """The second delete of the same id finds nothing."""
        created = create_remainder(client)
        client.delete(f"/api/remainders/{created['id']}")

        response = client.delete(f"/api/remainders/{created['id']}")

        assert response.status_code == 404

    def test_delete_malformed_id_is_400(self, client: TestClient) -> None:
        """A malformed id is rejected before any lookup."""
        response = client.delete("/api/remainders/xyz")

        assert response.status_code == 400


class TestRemainderScenario:
    """End-to-end walk through create, list, delete and get."""

    def test_alice_lifecycle(self, client: TestClient) -> None:
        """Create with a mixed-case email, find it by lower-case email, delete it."""
        create_response = client.post(
            "/api/remainders",
            json={
                "name": "Alice",
                "email": "A@X.com",
                "phone": "+15551234567",
                "occasion": "birthday",
                "date": days_from_today(1).isoformat(),
                "time": "09:30",
                "relationship": "friend",
            },
        )
        assert create_response.status_code == 201
        created = create_response.json()["data"]
        assert created["email"] == "a@x.com"

        list_response = client.get("/api/remainders", params={"email": "a@x.com"})
        assert list_response.status_code == 200
        listed = list_response.json()["data"]
        assert [r["id"] for r in listed] == [created["id"]]

        delete_response = client.delete(f"/api/remainders/{created['id']}")
        assert delete_response.status_code == 200

        get_response = client.get(f"/api/remainders/{created['id']}")
        assert get_response.status_code == 404
