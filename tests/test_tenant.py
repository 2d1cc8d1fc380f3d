# tests/test_tenant.py

"""
Tests for the tenant dashboard endpoints.
"""

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError


@pytest.fixture
def tenant(fake_supabase):
    return fake_supabase.seed(
        "users",
        {"name": "Asha", "room": "3", "email": "foo@bar.com", "password": "pw", "deposit": 5000},
    )[0]


def test_tenant_session_required(client: TestClient, fake_supabase):
    response = client.get("/tenant/rents/pending", headers={"Authorization": "Bearer not-a-session"})

    assert response.status_code == 401


def test_pending_rents_sorted_and_totalled(client: TestClient, fake_supabase, tenant, tenant_headers):
    fake_supabase.seed(
        "rents",
        {"name": "Asha", "email": "Foo@Bar.com", "month": "2025-03", "amount": 1200, "status": "pending"},
        {"name": "Asha", "email": "foo@bar.com", "month": "2025-01", "amount": "1000", "status": "pending"},
        {"name": "Asha", "email": "foo@bar.com", "month": "2025-02", "amount": 1100, "status": "paid"},
        {"name": "Other", "email": "other@bar.com", "month": "2025-01", "amount": 999, "status": "pending"},
    )

    response = client.get("/tenant/rents/pending", headers=tenant_headers(tenant))

    assert response.status_code == 200
    data = response.json()
    assert [r["month"] for r in data["rents"]] == ["2025-01", "2025-03"]
    assert data["total_pending"] == 2200
    assert data["total_pending_display"] == "₹2200.00"
    assert data["rents"][0]["actions"][0]["action"] == "rent.pay"


def test_pending_rents_empty(client: TestClient, fake_supabase, tenant, tenant_headers):
    data = client.get("/tenant/rents/pending", headers=tenant_headers(tenant)).json()

    assert data["rents"] == []
    assert data["total_pending"] == 0
    assert data["notice"]["text"] == "No pending rents found"


def test_pending_rents_policy_fallback(client: TestClient, fake_supabase, tenant, tenant_headers):
    fake_supabase.seed("rents", {"name": "Asha", "email": "foo@bar.com", "month": "2025-01", "amount": 800, "status": "pending"})
    fake_supabase.fail("rents", "select", APIError({"code": "42501", "message": "permission denied"}), when="ilike")

    data = client.get("/tenant/rents/pending", headers=tenant_headers(tenant)).json()

    assert data["total_pending"] == 800


def test_payment_scenario(client: TestClient, fake_supabase, tenant, tenant_headers):
    rent = fake_supabase.seed(
        "rents",
        {"name": "Asha", "email": "foo@bar.com", "month": "2025-01", "amount": 1200, "status": "pending"},
    )[0]

    response = client.post(
        f"/tenant/rents/{rent['id']}/pay",
        json={"upi_id": "name@bank"},
        headers=tenant_headers(tenant),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["rent"]["status"] == "paid"
    assert data["close_after_seconds"] == 2
    assert data["pending"]["rents"] == []
    assert data["pending"]["total_pending"] == 0
    assert data["notice"]["text"] == "Payment successful! Rent for 2025-01 marked as paid."
    assert fake_supabase.rows("rents")[0]["status"] == "paid"


def test_payment_bad_upi_makes_no_backend_call(client: TestClient, fake_supabase, tenant, tenant_headers):
    rent = fake_supabase.seed(
        "rents",
        {"name": "Asha", "email": "foo@bar.com", "month": "2025-01", "amount": 1200, "status": "pending"},
    )[0]
    headers = tenant_headers(tenant)

    response = client.post(f"/tenant/rents/{rent['id']}/pay", json={"upi_id": "bad-format"}, headers=headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Please enter a valid UPI ID (e.g., yourname@paytm)"
    assert fake_supabase.calls == []
    assert fake_supabase.rows("rents")[0]["status"] == "pending"


def test_payment_empty_upi(client: TestClient, fake_supabase, tenant, tenant_headers):
    response = client.post("/tenant/rents/1/pay", json={"upi_id": "  "}, headers=tenant_headers(tenant))

    assert response.status_code == 400
    assert response.json()["detail"] == "Please enter UPI ID"


def test_payment_for_someone_elses_rent(client: TestClient, fake_supabase, tenant, tenant_headers):
    rent = fake_supabase.seed(
        "rents",
        {"name": "Other", "email": "other@bar.com", "month": "2025-01", "amount": 1200, "status": "pending"},
    )[0]

    response = client.post(
        f"/tenant/rents/{rent['id']}/pay",
        json={"upi_id": "name@bank"},
        headers=tenant_headers(tenant),
    )

    assert response.status_code == 404
    assert fake_supabase.rows("rents")[0]["status"] == "pending"


def test_payment_already_paid(client: TestClient, fake_supabase, tenant, tenant_headers):
    rent = fake_supabase.seed(
        "rents",
        {"name": "Asha", "email": "foo@bar.com", "month": "2025-01", "amount": 1200, "status": "paid"},
    )[0]

    response = client.post(
        f"/tenant/rents/{rent['id']}/pay",
        json={"upi_id": "name@bank"},
        headers=tenant_headers(tenant),
    )

    assert response.status_code == 409


def test_pay_through_action_dispatch(client: TestClient, fake_supabase, tenant, tenant_headers):
    rent = fake_supabase.seed(
        "rents",
        {"name": "Asha", "email": "foo@bar.com", "month": "2025-01", "amount": 1200, "status": "pending"},
    )[0]

    response = client.post(
        "/tenant/actions/rent.pay",
        json={"target": str(rent["id"]), "value": "asha.k@okbank"},
        headers=tenant_headers(tenant),
    )

    assert response.status_code == 200
    assert fake_supabase.rows("rents")[0]["status"] == "paid"


def test_submit_maintenance_request(client: TestClient, fake_supabase, tenant, tenant_headers):
    response = client.post(
        "/tenant/maintenance",
        json={"request": "  Leaky tap in bathroom "},
        headers=tenant_headers(tenant),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["request"]["status"] == "open"
    assert data["request"]["request"] == "Leaky tap in bathroom"
    assert len(data["requests"]) == 1

    stored = fake_supabase.rows("maintenance")[0]
    assert stored["name"] == "Asha"
    assert stored["email"] == "foo@bar.com"


def test_submit_empty_maintenance_request(client: TestClient, fake_supabase, tenant, tenant_headers):
    response = client.post("/tenant/maintenance", json={"request": " "}, headers=tenant_headers(tenant))

    assert response.status_code == 400
    assert response.json()["detail"] == "Please enter a request description"
    assert fake_supabase.rows("maintenance") == []


def test_my_requests_only_mine(client: TestClient, fake_supabase, tenant, tenant_headers):
    fake_supabase.seed(
        "maintenance",
        {"name": "Asha", "email": "FOO@bar.com", "request": "Fan", "status": "in-progress",
         "created_at": "2025-01-05T10:00:00+00:00"},
        {"name": "Other", "email": "other@bar.com", "request": "Door", "status": "open"},
    )

    data = client.get("/tenant/maintenance", headers=tenant_headers(tenant)).json()

    assert len(data) == 1
    assert data[0]["status"] == "in-progress"
    assert data[0]["created_display"] == "January 5, 2025"
