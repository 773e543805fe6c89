"""Integration tests for service, session and user endpoints"""

from fastapi.testclient import TestClient
from helpers import API, TEST_PASSWORD, register


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "finny_entries_created_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"


def test_register_starts_session(client: TestClient):
    data = register(client, "Jo@Example.com", name="Jo")
    assert data["email"] == "jo@example.com"

    response = client.get(f"{API}/auth/session")
    assert response.status_code == 200
    assert response.json()["user_id"] == data["user_id"]


def test_register_duplicate_email(client: TestClient):
    register(client, "jo@example.com")

    response = client.post(f"{API}/auth/register", json={"email": "jo@example.com", "password": TEST_PASSWORD})
    assert response.status_code == 409


def test_register_rejects_short_password(client: TestClient):
    response = client.post(f"{API}/auth/register", json={"email": "jo@example.com", "password": "short"})
    assert response.status_code == 400


def test_login_and_logout(app, client: TestClient):
    register(TestClient(app), "jo@example.com")

    response = client.post(f"{API}/auth/login", json={"email": "jo@example.com", "password": "wrong-password"})
    assert response.status_code == 401

    response = client.post(f"{API}/auth/login", json={"email": "jo@example.com", "password": TEST_PASSWORD})
    assert response.status_code == 200
    assert client.get(f"{API}/user").status_code == 200

    client.post(f"{API}/auth/logout")
    assert client.get(f"{API}/user").status_code == 401


def test_endpoints_require_session(client: TestClient):
    for path in ("/user", "/income", "/expenses", "/bills", "/dashboard", "/user/experience"):
        assert client.get(f"{API}{path}").status_code == 401, path


def test_session_update_requires_session(client: TestClient):
    response = client.post(f"{API}/auth/session/update", json={"name": "New"})
    assert response.status_code == 401


def test_get_user_defaults(auth_client: TestClient):
    response = auth_client.get(f"{API}/user")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Alex"
    assert data["income"] == 0
    assert data["employment_mode"] == "full-time"
    assert "password_hash" not in data


def test_update_profile_keeps_blank_fields(auth_client: TestClient):
    response = auth_client.put(f"{API}/user/profile", json={"bio": "Saving for a bike", "name": ""})

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["bio"] == "Saving for a bike"
    assert user["name"] == "Alex"


def test_update_income_settings(auth_client: TestClient):
    response = auth_client.put(
        f"{API}/user/income",
        json={"income": 4200, "employment_mode": "contract", "income_frequency": "bi-weekly"},
    )

    assert response.status_code == 200
    assert response.json()["employment_mode"] == "contract"

    user = auth_client.get(f"{API}/user").json()
    assert user["income"] == 4200
    assert user["income_frequency"] == "bi-weekly"


def test_update_income_settings_rejects_unknown_mode(auth_client: TestClient):
    response = auth_client.put(f"{API}/user/income", json={"income": 100, "employment_mode": "pirate"})
    assert response.status_code == 400


def test_experience_round_trip(auth_client: TestClient):
    initial = auth_client.get(f"{API}/user/experience").json()
    assert initial["level"] == 1
    assert initial["experience"] == 0
    assert initial["next_level_experience"] == 100

    response = auth_client.put(f"{API}/user/experience", json={"level": 3, "experience": 40})
    assert response.status_code == 200
    assert response.json()["next_level_experience"] == 450

    stored = auth_client.get(f"{API}/user/experience").json()
    assert (stored["level"], stored["experience"]) == (3, 40)


def test_experience_rejects_negative_values(auth_client: TestClient):
    response = auth_client.put(f"{API}/user/experience", json={"level": 1, "experience": -5})
    assert response.status_code == 400
