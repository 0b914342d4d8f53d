from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy import func, select

from authservice.app import get_container
from authservice.infrastructure.db import Database, UserRecord
from authservice.shared.errors.storage import ConnectionFailure
from authservice.shared.logging import get_correlation_id

REGISTRATION = {
    "name": "John_Doe",
    "email": "john@example.com",
    "password": "Password123!",
    "confirmPassword": "Password123!",
}


def test_register_login_flow(client: FlaskClient, flask_app: Flask) -> None:
    register = client.post("/api/v1/register", json=REGISTRATION)
    assert register.status_code == 201
    user = register.get_json()
    assert set(user) == {"id", "name", "email", "created_at"}
    assert len(user["id"]) == 32

    login = client.post(
        "/api/v1/login", json={"email": "john@example.com", "password": "Password123!"}
    )
    assert login.status_code == 200
    body = login.get_json()
    assert body["user"] == user

    tokens = get_container(flask_app).token_issuer
    claims = tokens.verify(body["token"])
    assert claims.user_id == user["id"]
    assert claims.email == "john@example.com"
    assert (claims.expires_at - claims.issued_at).total_seconds() == 3600


def test_wrong_password_and_unknown_email_look_the_same(client: FlaskClient) -> None:
    client.post("/api/v1/register", json=REGISTRATION)

    wrong = client.post(
        "/api/v1/login", json={"email": "john@example.com", "password": "WrongPass1!"}
    )
    unknown = client.post(
        "/api/v1/login", json={"email": "ghost@example.com", "password": "WrongPass1!"}
    )

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json() == unknown.get_json() == {
        "error": "AuthenticationError",
        "message": "Invalid credentials",
    }


def test_email_uniqueness_ignores_case(client: FlaskClient, database: Database) -> None:
    first = client.post("/api/v1/register", json={**REGISTRATION, "email": "Test@X.com"})
    second = client.post("/api/v1/register", json={**REGISTRATION, "email": "test@x.com"})

    assert first.status_code == 201
    assert first.get_json()["email"] == "test@x.com"
    assert second.status_code == 409
    assert second.get_json() == {"error": "ConflictError", "message": "Email already exists"}

    with database.session_scope() as session:
        assert session.scalar(select(func.count()).select_from(UserRecord)) == 1


def test_password_is_stored_hashed(client: FlaskClient, database: Database) -> None:
    client.post("/api/v1/register", json=REGISTRATION)

    with database.session_scope() as session:
        stored = session.scalars(select(UserRecord)).one().hashed_password

    assert stored != REGISTRATION["password"]
    assert stored.startswith("$2b$04$")


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({**REGISTRATION, "name": "ab"}, "Name must be between 3 and 50 characters"),
        ({**REGISTRATION, "password": "password123!"}, "uppercase letter"),
        ({**REGISTRATION, "confirmPassword": "Password123?"}, "Passwords do not match"),
    ],
)
def test_register_validation_errors(client: FlaskClient, payload: dict, message: str) -> None:
    response = client.post("/api/v1/register", json=payload)

    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "ValidationError"
    assert message in body["message"]


def test_health_reports_database_up(client: FlaskClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "ok"
    assert body["services"] == {"database": "up"}


def test_health_reports_database_down(
    client: FlaskClient, database: Database, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _down() -> None:
        raise ConnectionFailure()

    monkeypatch.setattr(database, "ping", _down)

    response = client.get("/health")

    assert response.status_code == 503
    assert response.get_json()["services"] == {"database": "down"}


def test_responses_carry_request_id_and_security_headers(client: FlaskClient) -> None:
    response = client.get("/health", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["Cache-Control"] == "no-store"
    assert "Strict-Transport-Security" not in response.headers


def test_register_rejects_name_with_trailing_newline(client: FlaskClient) -> None:
    response = client.post("/api/v1/register", json={**REGISTRATION, "name": "John_Doe\n"})

    assert response.status_code == 400
    assert response.get_json()["message"] == "Name can only contain letters, numbers, and underscores"


def test_generated_request_id_is_echoed_and_cleared(client: FlaskClient) -> None:
    response = client.get("/health")

    assert response.headers["X-Request-ID"]
    assert response.headers["X-Request-ID"] != "-"
    assert get_correlation_id() == "-"
