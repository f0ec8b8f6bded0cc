"""End-to-end behaviour of the /api/expenses surface."""

import pytest


def test_create_expense_returns_persisted_record(client):
    resp = client.post(
        "/api/expenses", json={"itemName": "Lunch at cafeteria", "amount": 25.50, "category": "Food"}
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "expense added successfully"
    expense = body["expense"]
    assert set(expense) == {"id", "item_name", "amount", "category", "created_at"}
    assert expense["id"] > 0
    assert expense["item_name"] == "Lunch at cafeteria"
    assert expense["amount"] == 25.5
    assert expense["category"] == "Food"


def test_create_accepts_zero_amount(client):
    resp = client.post("/api/expenses", json={"itemName": "Free sample", "amount": 0})
    assert resp.status_code == 201
    assert resp.json()["expense"]["amount"] == 0


@pytest.mark.parametrize("category", [None, "Groceries", "food", ""])
def test_create_defaults_category_to_other(client, category):
    body = {"itemName": "Thing", "amount": 3}
    if category is not None:
        body["category"] = category
    resp = client.post("/api/expenses", json=body)
    assert resp.status_code == 201
    assert resp.json()["expense"]["category"] == "Other"


@pytest.mark.parametrize(
    "body,message",
    [
        ({"itemName": "", "amount": 10}, "item name required"),
        ({"itemName": "   ", "amount": 10}, "item name required"),
        ({"amount": 10}, "item name required"),
        ({"itemName": "Snack"}, "amount required"),
        ({"itemName": "Snack", "amount": None}, "amount required"),
        ({"itemName": "Bus fare", "amount": -5}, "amount must be a non-negative number"),
        ({"itemName": "Coffee", "amount": "invalid"}, "amount must be a non-negative number"),
    ],
)
def test_create_rejects_invalid_input_without_storing(client, db, body, message):
    resp = client.post("/api/expenses", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": message}
    assert db.count_expenses() == 0


def test_create_rejects_non_object_body(client, db):
    resp = client.post("/api/expenses", json=["Coffee", 8.75])
    assert resp.status_code == 400
    assert resp.json() == {"error": "invalid request body"}
    assert db.count_expenses() == 0


def test_list_empty_is_success(client):
    resp = client.get("/api/expenses")
    assert resp.status_code == 200
    assert resp.json() == {"expenses": []}


def test_list_is_newest_first(client, add_expense):
    first = add_expense("Lunch", 25.5, "Food")
    second = add_expense("Bus fare", 5, "Transport")
    third = add_expense("Movie", 12, "Entertainment")

    expenses = client.get("/api/expenses").json()["expenses"]
    assert [e["id"] for e in expenses] == [third["id"], second["id"], first["id"]]
    stamps = [e["created_at"] for e in expenses]
    assert stamps == sorted(stamps, reverse=True)


def test_list_filters_by_category(client, add_expense):
    add_expense("Lunch", 25.5, "Food")
    add_expense("Bus fare", 5, "Transport")
    add_expense("Dinner", 18, "Food")

    resp = client.get("/api/expenses", params={"category": "Food"})
    assert resp.status_code == 200
    expenses = resp.json()["expenses"]
    assert [e["item_name"] for e in expenses] == ["Dinner", "Lunch"]
    assert all(e["category"] == "Food" for e in expenses)

    assert client.get("/api/expenses", params={"category": "Bills"}).json() == {"expenses": []}
    assert len(client.get("/api/expenses", params={"category": ""}).json()["expenses"]) == 3


def test_filter_outside_enumeration_is_not_normalized(client, add_expense):
    add_expense("Mystery", 4, "Groceries")  # stored as Other
    assert client.get("/api/expenses", params={"category": "Groceries"}).json() == {"expenses": []}
    assert client.get("/api/expenses/total", params={"category": "Groceries"}).json() == {"total": 0}
    assert client.get("/api/expenses/total", params={"category": "Other"}).json() == {"total": 4}


def test_total_of_nothing_is_numeric_zero(client):
    resp = client.get("/api/expenses/total")
    assert resp.status_code == 200
    total = resp.json()["total"]
    assert total == 0
    assert isinstance(total, (int, float))


def test_total_sums_amounts(client, add_expense):
    add_expense("Lunch at cafeteria", 25.50, "Food")
    add_expense("Bus fare", 5.00, "Transport")
    assert client.get("/api/expenses/total").json() == {"total": 30.5}
    assert client.get("/api/expenses/total", params={"category": "Food"}).json() == {"total": 25.5}
    assert client.get("/api/expenses/total", params={"category": "Bills"}).json() == {"total": 0}


def test_total_keeps_two_decimal_precision(client, add_expense):
    for amount in (0.1, 0.2, 0.3):
        add_expense("Sweets", amount, "Food")
    assert client.get("/api/expenses/total").json() == {"total": 0.6}


def test_delete_existing_expense(client, add_expense):
    expense = add_expense("Coffee", 8.75)
    resp = client.delete(f"/api/expenses/{expense['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "expense deleted successfully", "id": expense["id"]}
    ids = [e["id"] for e in client.get("/api/expenses").json()["expenses"]]
    assert expense["id"] not in ids


def test_delete_missing_expense_is_404(client, app, add_expense):
    add_expense("Coffee", 8.75)
    calls = []
    original = app.state.db.delete_expense
    app.state.db.delete_expense = lambda expense_id: calls.append(expense_id) or original(expense_id)

    resp = client.delete("/api/expenses/9999")
    assert resp.status_code == 404
    assert resp.json() == {"error": "expense not found"}
    assert calls == []


@pytest.mark.parametrize("raw_id", ["0", "-1", "abc", "1.5", "99999999999999999999"])
def test_delete_rejects_invalid_ids(client, raw_id):
    resp = client.delete(f"/api/expenses/{raw_id}")
    assert resp.status_code == 400
    assert resp.json() == {"error": "invalid id"}


def test_delete_tolerates_row_vanishing_after_check(client, app, add_expense):
    expense = add_expense("Coffee", 8.75)
    db = app.state.db
    original = db.get_expense

    def get_then_vanish(expense_id):
        row = original(expense_id)
        db.delete_expense(expense_id)  # concurrent caller wins the race
        return row

    db.get_expense = get_then_vanish
    resp = client.delete(f"/api/expenses/{expense['id']}")
    assert resp.status_code == 200
    assert resp.json()["id"] == expense["id"]


def test_coffee_lifecycle(client):
    baseline = client.get("/api/expenses/total").json()["total"]

    resp = client.post("/api/expenses", json={"itemName": "  Coffee  ", "amount": 8.75})
    assert resp.status_code == 201
    coffee = resp.json()["expense"]
    assert coffee["item_name"] == "Coffee"
    assert coffee["category"] == "Other"

    listed = client.get("/api/expenses").json()["expenses"]
    assert coffee["id"] in [e["id"] for e in listed]
    assert client.get("/api/expenses/total").json()["total"] == pytest.approx(baseline + 8.75)

    resp = client.delete(f"/api/expenses/{coffee['id']}")
    assert resp.status_code == 200

    listed = client.get("/api/expenses").json()["expenses"]
    assert coffee["id"] not in [e["id"] for e in listed]
    assert client.get("/api/expenses/total").json()["total"] == pytest.approx(baseline)


def test_create_rejects_underscored_amount(client, db):
    resp = client.post("/api/expenses", json={"itemName": "x", "amount": "1_000"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "amount must be a non-negative number"}
    assert db.count_expenses() == 0
