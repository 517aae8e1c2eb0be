"""
Tests for settlement endpoints.
"""
import pytest
from fastapi.testclient import TestClient
from tripsettle.main import app

client = TestClient(app)

TRIP = {
    "travelers": ["A", "B", "C"],
    "expenses": [
        {
            "id": "e1",
            "title": "Groceries",
            "amount": 90,
            "payers": [{"name": "A", "amount": 90}],
            "participants": []
        }
    ]
}


def test_health():
    """Test health check endpoints."""
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").status_code == 200


def test_balances():
    """Test balance calculation endpoint."""
    response = client.post("/api/settlement/balances", json=TRIP)
    assert response.status_code == 200
    data = response.json()
    assert list(data) == ["A", "B", "C"]
    assert data["A"]["balance"] == pytest.approx(60)
    assert data["B"]["owed"] == pytest.approx(30)
    assert data["B"]["expenses"][0]["expense_id"] == "e1"
    assert data["B"]["expenses"][0]["is_payer"] is False


def test_plan():
    """Test planning transfers from balances."""
    response = client.post(
        "/api/settlement/plan",
        json={"balances": {"A": 50, "B": -50}, "traveler_order": ["A", "B"]}
    )
    assert response.status_code == 200
    assert response.json() == [{"from": "B", "to": "A", "amount": 50.0}]


def test_plan_without_order():
    """Test traveler_order is optional."""
    response = client.post("/api/settlement/plan", json={"balances": {}})
    assert response.status_code == 200
    assert response.json() == []


def test_calculate():
    """Test full settlement calculation."""
    response = client.post("/api/settlement/calculate", json=TRIP)
    assert response.status_code == 200
    data = response.json()
    assert data["settlement_count"] == 2
    assert data["settlements"][0] == {"from": "B", "to": "A", "amount": 30.0}
    assert data["total_expenses"] == pytest.approx(90)
    assert data["fair_share"] == pytest.approx(30)
    assert data["warnings"] == []
    assert "B -> A: 30.00" in data["summary"]


def test_calculate_legacy_paid_by():
    """Test older expense records with paidBy."""
    response = client.post(
        "/api/settlement/calculate",
        json={"travelers": ["A", "B"], "expenses": [{"amount": 100, "paidBy": "A"}]}
    )
    assert response.status_code == 200
    assert response.json()["settlements"] == [{"from": "B", "to": "A", "amount": 50.0}]


def test_invalid_expense_rejected():
    """Test negative amounts fail validation."""
    response = client.post(
        "/api/settlement/calculate",
        json={"travelers": ["A"], "expenses": [{"amount": -1, "payers": []}]}
    )
    assert response.status_code == 422


def test_missing_travelers_rejected():
    """Test the traveler list is required."""
    response = client.post("/api/settlement/balances", json={"expenses": []})
    assert response.status_code == 422
