import pytest
from fastapi.testclient import TestClient

from main import app

client = TestClient(app)

TRIP = {
    "roster": ["John", "Sarah", "Mike"],
    "expenses": [
        {"payer": "John", "amountMinorUnits": 500000, "description": "Hotel Booking", "date": "2024-01-15"},
        {"payer": "Sarah", "amountMinorUnits": 120000, "description": "Restaurant", "date": "2024-01-16"},
        {"payer": "Mike", "amountMinorUnits": 45000, "description": "Cab Fare", "date": "2024-01-16"},
    ],
}


def test_root():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Settlement Engine API"}


def test_settlements():
    response = client.post("/settlements", json=TRIP)

    assert response.status_code == 200
    assert response.json() == {
        "settlements": [
            {"from": "Mike", "to": "John", "amountMinorUnits": 176666},
            {"from": "Sarah", "to": "John", "amountMinorUnits": 101667},
        ],
        "totalMinorUnits": 665000,
        "balances": {"John": 278333, "Sarah": -101667, "Mike": -176666},
    }


def test_settlements_are_byte_identical_across_calls():
    first = client.post("/settlements", json=TRIP)
    second = client.post("/settlements", json=TRIP)

    assert first.content == second.content


def test_settlements_with_participant_subset():
    payload = {
        "roster": ["alice", "bob", "carol"],
        "expenses": [
            {"payer": "alice", "amountMinorUnits": 600, "participants": ["alice", "bob"]},
        ],
    }

    response = client.post("/settlements", json=payload)

    assert response.status_code == 200
    assert response.json()["settlements"] == [
        {"from": "bob", "to": "alice", "amountMinorUnits": 300},
    ]
    assert response.json()["balances"]["carol"] == 0


def test_balances():
    response = client.post("/balances", json=TRIP)

    assert response.status_code == 200
    assert response.json() == {
        "totalMinorUnits": 665000,
        "balances": {"John": 278333, "Sarah": -101667, "Mike": -176666},
    }


def test_summary():
    response = client.post("/summary", json=TRIP)

    assert response.status_code == 200
    body = response.json()
    assert body["totalMinorUnits"] == 665000
    assert body["expenseCount"] == 3
    assert body["averageExpenseMinorUnits"] == 221667
    assert body["spendingByCategory"] == {
        "Accommodation": 500000,
        "Food & Drinks": 120000,
        "Transport": 45000,
    }
    assert body["members"] == [
        {"member": "John", "paidMinorUnits": 500000, "shareMinorUnits": 221667, "balanceMinorUnits": 278333},
        {"member": "Sarah", "paidMinorUnits": 120000, "shareMinorUnits": 221667, "balanceMinorUnits": -101667},
        {"member": "Mike", "paidMinorUnits": 45000, "shareMinorUnits": 221666, "balanceMinorUnits": -176666},
    ]


def test_summary_without_expenses():
    response = client.post("/summary", json={"roster": ["a", "b"], "expenses": []})

    assert response.status_code == 200
    assert response.json()["averageExpenseMinorUnits"] == 0
    assert response.json()["spendingByCategory"] == {}


@pytest.mark.parametrize("path", ["/settlements", "/balances", "/summary"])
def test_invalid_expense_returns_structured_error(path):
    payload = {
        "roster": ["alice", "bob"],
        "expenses": [
            {"payer": "alice", "amountMinorUnits": 100},
            {"payer": "alice", "amountMinorUnits": -100},
        ],
    }

    response = client.post(path, json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "InvalidInputError"
    assert body["index"] == 1
    assert body["field"] == "amount"
    assert "expenses[1].amount" in body["message"]


def test_unknown_participant():
    payload = {
        "roster": ["alice", "bob"],
        "expenses": [{"payer": "alice", "amountMinorUnits": 100, "participants": ["carol"]}],
    }

    response = client.post("/settlements", json=payload)

    assert response.status_code == 400
    assert response.json()["field"] == "participants"


def test_roster_of_one():
    response = client.post("/settlements", json={"roster": ["solo"], "expenses": []})

    assert response.status_code == 400
    assert response.json()["error"] == "InvalidInputError"
    assert response.json()["field"] == "roster"
    assert response.json()["index"] is None


def test_malformed_request_is_rejected_by_schema():
    response = client.post("/settlements", json={"roster": ["a", "b"], "expenses": [{"payer": "a"}]})

    assert response.status_code == 422


def test_fractional_amount_is_rejected_by_schema():
    payload = {"roster": ["a", "b"], "expenses": [{"payer": "a", "amountMinorUnits": 10.5}]}

    response = client.post("/settlements", json=payload)

    assert response.status_code == 422


@pytest.mark.parametrize("amount", [True, "100", 10.0])
def test_non_integer_amount_is_rejected_by_schema(amount):
    payload = {"roster": ["a", "b"], "expenses": [{"payer": "a", "amountMinorUnits": amount}]}

    response = client.post("/settlements", json=payload)

    assert response.status_code == 422
