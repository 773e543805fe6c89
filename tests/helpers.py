"""Shared builders for tests"""

from fastapi.testclient import TestClient
from finny.domain.models import MoneyEntry

TEST_PASSWORD = "correct-horse-battery"
API = "/api/v1"


def register(client: TestClient, email: str, password: str = TEST_PASSWORD, name: str | None = None) -> dict:
    """Register an account; the client keeps the session cookie"""
    response = client.post(f"{API}/auth/register", json={"email": email, "password": password, "name": name})
    assert response.status_code == 201, response.text
    return response.json()


def entry(amount: float, label: str, frequency: str = "monthly", entry_id: str | None = None) -> MoneyEntry:
    return MoneyEntry(id=entry_id or f"{label}-{amount}", amount=amount, frequency=frequency, label=label)
