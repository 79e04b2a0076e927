from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from billflow.auth.service import create_access_token
from billflow.main import create_app
from billflow.settings.service import default_settings
from billflow.store import memory_store, sql_store

ADMIN_PASSWORD = "correct-horse"


# ============================================================
# SEED DATA (API tests), relative to today
# ============================================================

def seed_records():
    """
    Raw records in the hosted-backend spelling (Id, Name, camelCase) so the
    normalization boundary is exercised on every API test.
    """
    now = datetime.now()
    today = now.date()
    return {
        "clients": [
            {"Id": 1, "Name": "Acme Corp", "email": "ap@acme.test", "paymentTerms": 30,
             "createdAt": now - timedelta(days=200)},
            {"Id": 2, "Name": "Globex", "email": "finance@globex.test", "paymentTerms": 15,
             "address": "1 Globex Way", "createdAt": now - timedelta(days=100)},
        ],
        "bills": [
            {"Id": 1, "billNumber": "BILL-2024-001", "clientId": 1, "total": 1000.0,
             "items": [{"description": "Website", "quantity": 1, "rate": 1000, "amount": 1000}],
             "status": "pending", "dueDate": today + timedelta(days=10),
             "createdAt": now - timedelta(days=20)},
            {"Id": 2, "billNumber": "BILL-2024-002", "clientId": 1, "total": 500.0,
             "items": [{"description": "Hosting", "quantity": 5, "rate": 100, "amount": 500}],
             "status": "pending", "dueDate": today - timedelta(days=5),
             "createdAt": now - timedelta(days=40)},
            {"Id": 3, "billNumber": "BILL-2024-003", "clientId": 2, "total": 250.0,
             "items": [{"description": "Audit", "quantity": 1, "rate": 250, "amount": 250}],
             "status": "paid", "dueDate": today - timedelta(days=30),
             "createdAt": now},
        ],
        "payments": [
            {"Id": 1, "billId": 3, "amount": 250.0, "method": "Bank Transfer",
             "date": now},
            {"Id": 2, "billId": 1, "amount": 400.0, "method": "Cash",
             "date": now - timedelta(days=2)},
        ],
        "quotations": [
            {"Id": 1, "clientId": 2, "total": 800.0,
             "items": [{"description": "Redesign", "quantity": 2, "rate": 400, "amount": 800}],
             "validUntil": today + timedelta(days=30), "status": "draft",
             "createdAt": now - timedelta(days=3)},
        ],
        "services": [
            {"Id": 1, "Name": "Logo design", "description": "Brand mark", "category": "Design",
             "price": 300.0, "unit": "project", "isActive": True,
             "createdAt": now - timedelta(days=50)},
            {"Id": 2, "Name": "Copywriting", "description": "Landing page copy",
             "category": "Writing", "price": 60.0, "unit": "hour", "isActive": False,
             "createdAt": now - timedelta(days=40)},
        ],
    }


@pytest.fixture
def store():
    return memory_store(default_settings("admin", ADMIN_PASSWORD), seed_records())


@pytest.fixture
def app(store):
    return create_app(store)


@pytest.fixture
def auth_headers():
    token = create_access_token({"sub": "admin", "role": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def api(app, auth_headers):
    """TestClient that sends a valid bearer token on every request."""
    with TestClient(app) as client:
        client.headers.update(auth_headers)
        yield client


@pytest.fixture
def sql_api(tmp_path, auth_headers):
    """TestClient over an empty SQLite-backed store."""
    store = sql_store(default_settings("admin", ADMIN_PASSWORD), f"sqlite:///{tmp_path / 'api.db'}")
    with TestClient(create_app(store)) as client:
        client.headers.update(auth_headers)
        yield client
