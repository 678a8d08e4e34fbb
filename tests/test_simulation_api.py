"""
API tests for catalog and simulation endpoints.
"""
from typing import Any, Dict

from fastapi.testclient import TestClient


def test_catalog_is_seeded(client: TestClient):
    credit_types = client.get("/catalog/credit-types").json()
    assert len(credit_types) >= 1
    assert {"min_amount", "max_amount", "max_months", "default_annual_rate"} <= set(credit_types[0])

    assert len(client.get("/catalog/jobs").json()) > 0
    assert len(client.get("/catalog/employment-types").json()) > 0
    assert client.get("/catalog/settings").json() == {"currency": "MAD"}


def test_preview_does_not_persist(client: TestClient):
    response = client.post("/simulations/preview", json={"amount": 6000, "months": 6, "annual_rate": 0})
    assert response.status_code == 200
    data = response.json()

    assert data["monthly_payment"] == 1000.0
    assert len(data["amortization"]) == 6
    assert data["amortization"][-1]["remaining_balance"] == 0.0


def test_create_and_read_simulation(simulation: Dict[str, Any], client: TestClient):
    assert simulation["id"] > 0
    assert simulation["base_monthly_payment"] == 4387.14
    assert simulation["amortization"][0]["interest"] == 416.67
    assert len(simulation["amortization"]) == 24

    response = client.get(f"/simulations/{simulation['id']}")
    assert response.status_code == 200
    stored = response.json()
    assert stored["amortization"] == simulation["amortization"]
    assert stored["total_cost"] == simulation["total_cost"]


def test_simulation_not_found(client: TestClient):
    response = client.get("/simulations/999")
    assert response.status_code == 404
    assert "correlation_id" in response.json()


def test_amount_outside_credit_type_bounds(client: TestClient, catalog: Dict[str, Any]):
    credit_type = catalog["credit_type"]
    payload = {
        "credit_type_id": credit_type["id"],
        "amount": credit_type["max_amount"] + 1,
        "months": 12,
        "annual_rate": 5,
    }
    response = client.post("/simulations", json=payload)
    assert response.status_code == 422
    assert "Maximum amount" in response.json()["detail"]

    payload.update(amount=credit_type["min_amount"], months=credit_type["max_months"] + 1)
    response = client.post("/simulations", json=payload)
    assert response.status_code == 422
    assert "Maximum duration" in response.json()["detail"]


def test_unknown_credit_type(client: TestClient):
    response = client.post("/simulations", json={"credit_type_id": 999, "amount": 10000, "months": 12, "annual_rate": 5})
    assert response.status_code == 404


def test_invalid_terms_rejected(client: TestClient):
    """Non-numeric and non-positive values never reach the engine."""
    assert client.post("/simulations/preview", json={"amount": "abc", "months": 12, "annual_rate": 5}).status_code == 422
    assert client.post("/simulations/preview", json={"amount": 0, "months": 12, "annual_rate": 5}).status_code == 422
    assert client.post("/simulations/preview", json={"amount": 1000, "months": 0, "annual_rate": 5}).status_code == 422
    assert client.post("/simulations/preview", json={"amount": 1000, "months": 12, "annual_rate": -1}).status_code == 422


def test_preview_amount_upper_bound(client: TestClient):
    assert client.post("/simulations/preview", json={"amount": 1e27, "months": 12, "annual_rate": 5}).status_code == 422
    assert client.post(
        "/simulations/preview", json={"amount": 1000, "months": 12, "annual_rate": 5, "insurance_rate": 101}
    ).status_code == 422

    response = client.post("/simulations/preview", json={"amount": 1_000_000_000, "months": 600, "annual_rate": 30})
    assert response.status_code == 200
    assert response.json()["amortization"][-1]["remaining_balance"] == 0.0


def test_correlation_id_is_propagated(client: TestClient):
    response = client.get("/health", headers={"X-Correlation-ID": "trace-123"})
    assert response.status_code == 200
    assert response.headers["X-Correlation-ID"] == "trace-123"


def test_admin_login(client: TestClient, admin_headers: Dict[str, str]):
    response = client.get("/auth/me", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["email"] == "reviewer@selefni.ma"


def test_admin_login_rejects_bad_password(client: TestClient):
    response = client.post("/auth/login", json={"email": "reviewer@selefni.ma", "password": "wrong"})
    assert response.status_code == 401


def test_admin_cookie_session(client: TestClient):
    response = client.post("/auth/login", json={"email": "reviewer@selefni.ma", "password": "password123"})
    assert response.status_code == 200
    assert "access_token" in response.cookies

    assert client.get("/auth/me").status_code == 200

    client.post("/auth/logout")
    client.cookies.clear()
    assert client.get("/auth/me").status_code == 401


def test_pdf_export_requires_admin(client: TestClient, simulation: Dict[str, Any], admin_headers: Dict[str, str]):
    assert client.get(f"/simulations/{simulation['id']}/pdf").status_code == 401

    response = client.get(f"/simulations/{simulation['id']}/pdf", headers=admin_headers)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")
