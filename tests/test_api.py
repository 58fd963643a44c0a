"""End-to-end tests of the JSON API through FastAPI's TestClient."""

from datetime import date

import pytest


def add_recipient(client):
    response = client.post("/recipients", json={"name": "ACME GmbH", "country": "de"})
    assert response.status_code == 201
    return response.json()["recipient"]


def add_invoice(client, recipient_id, due_date):
    response = client.post("/invoices", json={
        "recipient_id": recipient_id,
        "due_date": due_date,
        "items": [{"description": "Consulting", "quantity": 5, "unit_price": "100.00", "tax_rate": 0}],
    })
    assert response.status_code == 201
    return response.json()["invoice"]


def test_root_redirects_to_dashboard(client):
    response = client.get("/", follow_redirects=False)

    assert response.status_code in (302, 307)
    assert response.headers["location"] == "/dashboard"


def test_dashboard_starts_empty(client):
    body = client.get("/dashboard").json()

    assert body["stats"]["count"] == 0
    assert body["invoices"] == []


def test_create_expense_rejects_day_out_of_range(client):
    response = client.post("/planner/expenses", json={"name": "Rent", "amount": "900", "day_of_month": 32})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "day_of_month must be between 1 and 31"}


def test_create_expense_rejects_malformed_body(client):
    response = client.post("/planner/expenses", json={"name": "Rent"})

    assert response.status_code == 422


def test_expense_crud_round_trip(client):
    created = client.post("/planner/expenses", json={"name": "Rent", "amount": "900", "day_of_month": 1})
    assert created.status_code == 201
    expense = created.json()["expense"]
    assert expense["amount"] == "900.00"

    updated = client.patch(f"/planner/expenses/{expense['id']}", json={"active": False})
    assert updated.json()["expense"]["active"] is False

    planner = client.get("/planner").json()
    assert [e["id"] for e in planner["expenses"]] == [expense["id"]]
    assert len(planner["forecast"]) == 12
    assert all(entry["expenses"] == "0.00" for entry in planner["forecast"])

    assert client.delete(f"/planner/expenses/{expense['id']}").json() == {"success": True}
    assert client.delete(f"/planner/expenses/{expense['id']}").status_code == 404


def test_single_expense_crud_round_trip(client):
    created = client.post("/planner/single-expenses", json={"name": "Laptop", "amount": 1299, "date": "2030-06-03"})
    assert created.status_code == 201
    expense = created.json()["expense"]
    assert expense["date"] == "2030-06-03"

    updated = client.patch(f"/planner/single-expenses/{expense['id']}", json={"name": "Desk"})
    assert updated.json()["expense"]["name"] == "Desk"

    assert client.delete(f"/planner/single-expenses/{expense['id']}").json() == {"success": True}
    assert client.get("/planner").json()["single_expenses"] == []


def test_update_balance_form(client):
    response = client.post("/planner/balance", data={"starting_balance": "1,000.50"})

    assert response.json() == {"success": True, "starting_balance": "1000.50"}
    assert client.get("/planner").json()["starting_balance"] == "1000.50"


def test_update_balance_rejects_garbage(client):
    response = client.post("/planner/balance", data={"starting_balance": "lots"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_forecast_endpoint(client):
    client.post("/planner/balance", data={"starting_balance": "1000"})
    recipient = add_recipient(client)
    invoice = add_invoice(client, recipient["id"], "2024-04-10")
    assert client.post(f"/invoices/{invoice['id']}/status", json={"status": "sent"}).json() == {"success": True}

    body = client.get("/forecast", params={"months": 2, "as_of_date": "2024-04-17"}).json()

    assert body["starting_balance"] == "1000.00"
    assert body["months"] == 2
    april = body["entries"][0]
    assert april["month_end_date"] == "2024-04-30"
    assert april["income"] == "500.00"
    assert april["expenses"] == "0.00"
    assert april["balance"] == "1500.00"
    assert april["transactions"] == [{
        "date": "2024-04-10",
        "description": f"Invoice {invoice['number']}",
        "amount": "500.00",
        "kind": "income",
    }]
    assert body["entries"][1]["month_end_date"] == "2024-05-31"
    assert body["entries"][1]["balance"] == "1500.00"


def test_forecast_rejects_horizon_above_cap(client):
    response = client.get("/forecast", params={"months": 100000})

    assert response.status_code == 422


def test_forecast_zero_months_and_bad_date(client):
    assert client.get("/forecast", params={"months": 0}).json()["entries"] == []

    response = client.get("/forecast", params={"as_of_date": "17.04.2024"})
    assert response.status_code == 400


def test_draft_invoices_do_not_count_as_income(client):
    recipient = add_recipient(client)
    add_invoice(client, recipient["id"], date.today().isoformat())

    body = client.get("/forecast", params={"months": 1}).json()

    assert body["entries"][0]["income"] == "0.00"


def test_invoice_status_rejects_unknown_value(client):
    recipient = add_recipient(client)
    invoice = add_invoice(client, recipient["id"], "2024-04-10")

    response = client.post(f"/invoices/{invoice['id']}/status", json={"status": "lost"})

    assert response.status_code == 400


def test_invoice_requires_line_items(client):
    recipient = add_recipient(client)

    response = client.post("/invoices", json={"recipient_id": recipient["id"], "items": []})

    assert response.status_code == 422


def test_invoice_rejects_quantity_beyond_storage_range(client):
    recipient = add_recipient(client)

    response = client.post("/invoices", json={
        "recipient_id": recipient["id"],
        "items": [{"description": "Bulk", "quantity": 1000000000, "unit_price": "0.01", "tax_rate": 0}],
    })

    assert response.status_code == 422
    assert client.get("/dashboard").json()["stats"]["count"] == 0


@pytest.mark.parametrize("body", [{"name": "   ", "country": "DE"}, {"name": "ACME GmbH", "country": "  "}])
def test_create_recipient_rejects_blank_name_or_country(client, body):
    response = client.post("/recipients", json=body)

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert client.get("/recipients").json()["count"] == 0


def test_recipient_delete_guard(client):
    recipient = add_recipient(client)
    invoice = add_invoice(client, recipient["id"], "2024-04-10")

    blocked = client.delete(f"/recipients/{recipient['id']}")
    assert blocked.status_code == 400

    client.delete(f"/invoices/{invoice['id']}")
    assert client.delete(f"/recipients/{recipient['id']}").json() == {"success": True}
    assert client.get("/recipients").json()["count"] == 0


def test_settings_round_trip(client):
    response = client.put("/settings", json={"invoice_prefix": "INV", "company_name": "Studio"})
    assert response.json()["settings"]["invoice_prefix"] == "INV"

    cleared = client.put("/settings", json={"company_name": ""}).json()["settings"]
    assert cleared["company_name"] is None
    assert cleared["invoice_prefix"] == "INV"

    recipient = add_recipient(client)
    invoice = add_invoice(client, recipient["id"], "2024-04-10")
    assert invoice["number"].startswith(f"INV-{date.today().year}-")
