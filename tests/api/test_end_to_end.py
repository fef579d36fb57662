"""End-to-end tests for the HTTP API through FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from kalistheniks.api.deps import reset_dependencies
from kalistheniks.config import get_settings
from kalistheniks.main import create_app

PASSWORD = "Password123"


@pytest.fixture
def client(monkeypatch, temp_db_path, secret):
    """Client against a fresh app wired to a temporary database."""
    monkeypatch.setenv("DATABASE_PATH", temp_db_path)
    monkeypatch.setenv("JWT_SECRET_KEY", secret)
    get_settings.cache_clear()
    reset_dependencies()

    with TestClient(create_app()) as test_client:
        yield test_client

    get_settings.cache_clear()
    reset_dependencies()


def _signup(client, email):
    response = client.post("/signup", json={"email": email, "password": PASSWORD})
    assert response.status_code == 201
    return response.json()


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_security_headers(self, client):
        response = client.get("/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "Strict-Transport-Security" not in response.headers


class TestAuthRoutes:
    """Tests for /signup and /login."""

    def test_signup_then_login(self, client):
        signup = _signup(client, "a@example.com")
        assert signup["user"]["email"] == "a@example.com"
        assert "password_hash" not in signup["user"]
        assert signup["token"]

        login = client.post("/login", json={"email": "a@example.com", "password": PASSWORD})

        assert login.status_code == 200
        assert login.json()["user"]["id"] == signup["user"]["id"]
        assert login.json()["token"] != signup["token"]

    def test_duplicate_signup(self, client):
        _signup(client, "a@example.com")

        response = client.post("/signup", json={"email": "a@example.com", "password": "Another1234"})

        assert response.status_code == 409
        assert response.json()["error"]["message"] == "failed to create account"

    def test_login_failures_identical(self, client):
        _signup(client, "a@example.com")

        unknown = client.post("/login", json={"email": "b@example.com", "password": PASSWORD})
        wrong = client.post("/login", json={"email": "a@example.com", "password": "WrongPass99"})

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()
        assert unknown.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.parametrize("payload", [
        {"email": "not-an-email", "password": PASSWORD},
        {"email": "a@example.com", "password": "short"},
        {"email": "a@example.com"},
    ])
    def test_signup_validation(self, client, payload):
        response = client.post("/signup", json=payload)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_signup_password_over_72_bytes(self, client):
        # Passes the character limit, fails the byte limit
        response = client.post("/signup", json={"email": "mb@example.com", "password": "é" * 40})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        login = client.post("/login", json={"email": "mb@example.com", "password": "é" * 40})
        assert login.status_code == 401


class TestProtectedRoutes:
    """Tests for bearer-protected session and plan routes."""

    def test_missing_token(self, client):
        response = client.get("/sessions")

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "missing token"

    @pytest.mark.parametrize("header", ["Bearer garbage", "Bearer a.b.c", "Token abc"])
    def test_bad_token(self, client, header):
        response = client.get("/plan/next", headers={"Authorization": header})

        assert response.status_code == 401
        assert response.json()["error"]["message"] in {"invalid token", "missing token"}

    def test_new_user_gets_default_plan(self, client):
        token = _signup(client, "a@example.com")["token"]

        response = client.get("/plan/next", headers=_auth(token))

        assert response.status_code == 200
        body = response.json()
        assert body["weight_kg"] == 20.0
        assert body["reps"] == 8
        assert body["exercise_id"]

    def test_record_and_progress(self, client):
        token = _signup(client, "a@example.com")["token"]

        session = client.post("/sessions", json={"session_type": "upper"}, headers=_auth(token))
        assert session.status_code == 201
        session_id = session.json()["id"]

        added = client.post(
            f"/sessions/{session_id}/sets",
            json={"exercise_id": "bench", "set_index": 0, "reps": 12, "weight_kg": 50},
            headers=_auth(token),
        )
        assert added.status_code == 201

        plan = client.get("/plan/next", headers=_auth(token)).json()
        assert plan["exercise_id"] == "bench"
        assert plan["weight_kg"] == 52.5
        assert plan["reps"] == 12
        assert plan["notes"] == "Hit upper range; increase weight. Next: switch to lower body."

        listed = client.get("/sessions", headers=_auth(token)).json()
        assert [s["id"] for s in listed] == [session_id]
        assert listed[0]["sets"][0]["reps"] == 12

    def test_other_users_session_is_not_found(self, client):
        owner = _signup(client, "a@example.com")["token"]
        intruder = _signup(client, "b@example.com")["token"]
        session_id = client.post("/sessions", json={}, headers=_auth(owner)).json()["id"]
        payload = {"exercise_id": "bench", "set_index": 0, "reps": 8, "weight_kg": 40}

        foreign = client.post(f"/sessions/{session_id}/sets", json=payload, headers=_auth(intruder))
        missing = client.post("/sessions/does-not-exist/sets", json=payload, headers=_auth(intruder))

        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json()
        assert client.get("/sessions", headers=_auth(owner)).json()[0]["sets"] == []

    def test_set_validation(self, client):
        token = _signup(client, "a@example.com")["token"]
        session_id = client.post("/sessions", json={}, headers=_auth(token)).json()["id"]

        response = client.post(
            f"/sessions/{session_id}/sets",
            json={"exercise_id": "bench", "set_index": 0, "reps": 0, "weight_kg": 40},
            headers=_auth(token),
        )

        assert response.status_code == 422
