"""
E2E tests for user personas driving the full API.

User personas:
- salaried saver: steady paycheck, few expenses, pays bills early
- contractor: irregular client income taxed as self-employed
- overspender: expenses above income, late on bills
"""

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient
from helpers import API, register


@pytest.mark.integration
def test_salaried_saver(client: TestClient):
    """
    Salaried saver: bi-weekly paycheck, rent and groceries
    Expected: healthy surplus, streak grows with each early payment
    """
    register(client, "saver@example.com", name="Saver")
    client.post(f"{API}/income", json={"source": "Employer", "amount": 2500, "frequency": "bi-weekly", "date": "2024-03-01"})
    client.post(f"{API}/expenses", json={"category": "Rent", "amount": 1600, "frequency": "monthly"})
    client.post(f"{API}/expenses", json={"category": "Groceries", "amount": 90, "frequency": "weekly"})

    for days_ahead in (3, 10, 17):
        bill = client.post(
            f"{API}/bills",
            json={
                "name": f"Bill due in {days_ahead}",
                "amount": 50,
                "due_date": (date.today() + timedelta(days=days_ahead)).isoformat(),
                "category": "Utilities",
                "frequency": "monthly",
            },
        ).json()
        client.post(
            f"{API}/bills/payment",
            json={"bill_id": bill["id"], "amount": 50, "payment_date": date.today().isoformat()},
        )

    dashboard = client.get(f"{API}/dashboard").json()
    assert dashboard["calculations"]["monthly_balance"] > 500
    assert dashboard["gamification"]["streak"] == 3
    assert dashboard["gamification"]["experience"] == 30

    achievements = {a["name"]: a["earned"] for a in client.get(f"{API}/dashboard/achievements").json()["achievements"]}
    assert achievements["Streak Keeper"] is True
    assert achievements["Saver"] is True


@pytest.mark.integration
def test_contractor(client: TestClient):
    """
    Contractor: quarterly and one-off client payments
    Expected: self-employment rate on top of the bracket
    """
    register(client, "contractor@example.com")
    client.put(f"{API}/user/income", json={"income": 15000, "employment_mode": "contract", "income_frequency": "quarterly"})
    client.post(f"{API}/income", json={"source": "Retainer", "amount": 15000, "frequency": "quarterly", "date": "2024-01-01"})
    client.post(f"{API}/income", json={"source": "Workshop", "amount": 2400, "frequency": "one-time", "date": "2024-02-10"})

    calculations = client.get(f"{API}/dashboard").json()["calculations"]

    # 5,000 + 200 per month -> 62,400 per year -> 22% + 7.65%
    assert calculations["total_monthly_income"] == pytest.approx(5200)
    assert calculations["tax_bracket"] == pytest.approx(0.2965)
    assert calculations["tax_amount"] == pytest.approx(62_400 * 0.2965)


@pytest.mark.integration
def test_overspender(client: TestClient):
    """
    Overspender: spending exceeds income, bill paid after its due date
    Expected: negative balance, low health score, no streak
    """
    register(client, "overspender@example.com")
    client.post(f"{API}/income", json={"source": "Part-time", "amount": 1500, "frequency": "monthly", "date": "2024-03-01"})
    client.post(f"{API}/expenses", json={"category": "Rent", "amount": 1400, "frequency": "monthly"})
    client.post(f"{API}/expenses", json={"category": "Dining", "amount": 100, "frequency": "weekly"})

    bill = client.post(
        f"{API}/bills",
        json={
            "name": "Phone",
            "amount": 80,
            "due_date": (date.today() - timedelta(days=4)).isoformat(),
            "category": "Utilities",
            "frequency": "monthly",
        },
    ).json()
    payment = client.post(
        f"{API}/bills/payment",
        json={"bill_id": bill["id"], "amount": 80, "payment_date": date.today().isoformat()},
    ).json()

    assert payment["on_time"] is False

    dashboard = client.get(f"{API}/dashboard").json()
    assert dashboard["calculations"]["monthly_balance"] < 0
    assert dashboard["gamification"]["streak"] == 0
    assert dashboard["gamification"]["health_score"] < 50
