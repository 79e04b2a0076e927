"""
Bill endpoints: creation with derived totals, effective-status listing,
progress and lifecycle.
"""

from datetime import date, datetime, timedelta

from billflow.bills.models import LineItem
from billflow.bills.service import calculate_line_items


class TestCalculateLineItems:

    def test_amounts_and_total_are_derived(self):
        items, total = calculate_line_items([
            LineItem(description="Design", quantity=3, rate=50, amount=999),
            LineItem(description="Hosting", quantity=0.5, rate=20),
        ])
        assert [i["amount"] for i in items] == [150.0, 10.0]
        assert total == 160.0


class TestCreateBill:

    def test_create_numbers_and_prices_the_bill(self, api):
        res = api.post("/bills/", json={
            "client_id": 2,
            "items": [
                {"description": "Audit", "quantity": 2, "rate": 125},
                {"description": "Report", "quantity": 1, "rate": 50},
            ],
        })
        assert res.status_code == 200
        bill = res.json()

        assert bill["bill_number"] == f"BILL-{datetime.now().year}-004"
        assert bill["status"] == "pending"
        assert bill["total"] == 300.0
        # Globex pays on 15 day terms
        expected_due = (datetime.now() + timedelta(days=15)).date()
        assert date.fromisoformat(bill["due_date"]) in (expected_due, expected_due - timedelta(days=1))

    def test_explicit_due_date(self, api):
        res = api.post("/bills/", json={
            "client_id": 1,
            "items": [{"description": "Work", "quantity": 1, "rate": 10}],
            "due_date": "2030-01-31",
        })
        assert res.json()["due_date"] == "2030-01-31"

    def test_unknown_client(self, api):
        res = api.post("/bills/", json={
            "client_id": 99,
            "items": [{"description": "Work", "quantity": 1, "rate": 10}],
        })
        assert res.status_code == 404

    def test_needs_items(self, api):
        res = api.post("/bills/", json={"client_id": 1, "items": []})
        assert res.status_code == 400


class TestListBills:

    def test_effective_status_and_client_names(self, api):
        bills = {b["id"]: b for b in api.get("/bills/").json()}

        assert bills[1]["effective_status"] == "pending"
        assert bills[2]["effective_status"] == "overdue"
        # Stored status is left alone
        assert bills[2]["status"] == "pending"
        assert bills[3]["client_name"] == "Globex"

    def test_status_filter_uses_effective_status(self, api):
        assert [b["id"] for b in api.get("/bills/?status=overdue").json()] == [2]
        assert [b["id"] for b in api.get("/bills/?status=pending").json()] == [1]
        assert len(api.get("/bills/?status=all").json()) == 3

    def test_search_and_filter_combine(self, api):
        res = api.get("/bills/?search=acme&status=pending")
        assert [b["id"] for b in res.json()] == [1]

    def test_search_by_number(self, api):
        assert [b["id"] for b in api.get("/bills/?search=bill-2024-003").json()] == [3]

    def test_dangling_client_reference(self, api, store):
        import asyncio
        asyncio.run(store.bills.update(3, {"client_id": 77}))

        bill = api.get("/bills/3").json()
        assert bill["client_name"] == "Unknown Client"


class TestBillLifecycle:

    def test_progress(self, api):
        res = api.get("/bills/1/progress")
        assert res.json() == {"total_paid": 400.0, "remaining": 600.0, "percent_paid": 40.0}

    def test_progress_missing_bill(self, api):
        assert api.get("/bills/99/progress").status_code == 404

    def test_payments_for_bill(self, api):
        assert [p["id"] for p in api.get("/bills/1/payments").json()] == [2]
        assert api.get("/bills/99/payments").status_code == 404

    def test_update_items_recomputes_total(self, api):
        res = api.put("/bills/2", json={"items": [{"description": "Hosting", "quantity": 2, "rate": 75}]})
        assert res.status_code == 200
        assert res.json()["total"] == 150.0
        assert res.json()["items"][0]["amount"] == 150.0

    def test_mark_paid(self, api):
        res = api.post("/bills/2/mark-paid")
        assert res.json()["status"] == "paid"
        assert api.get("/bills/2").json()["effective_status"] == "paid"

    def test_delete(self, api):
        assert api.delete("/bills/2").json() == {"message": "Bill deleted successfully"}
        assert api.get("/bills/2").status_code == 404
        assert api.delete("/bills/2").status_code == 404


class TestBillNumbering:

    ITEMS = [{"description": "Work", "quantity": 1, "rate": 10}]

    def test_number_not_reused_after_delete(self, api):
        year = datetime.now().year
        first = api.post("/bills/", json={"client_id": 1, "items": self.ITEMS}).json()
        assert first["bill_number"] == f"BILL-{year}-004"

        api.delete("/bills/1")
        res = api.post("/bills/", json={"client_id": 1, "items": self.ITEMS})

        assert res.status_code == 200
        assert res.json()["bill_number"] == f"BILL-{year}-005"
        numbers = [b["bill_number"] for b in api.get("/bills/").json()]
        assert len(numbers) == len(set(numbers))

    def test_sql_store_after_delete(self, sql_api):
        """The unique bill_number column must not reject the next bill."""
        year = datetime.now().year
        client = sql_api.post("/clients/", json={"name": "Acme", "email": "ap@acme.test"}).json()
        payload = {"client_id": client["id"], "items": self.ITEMS}

        first = sql_api.post("/bills/", json=payload).json()
        sql_api.post("/bills/", json=payload)
        assert sql_api.delete(f"/bills/{first['id']}").status_code == 200

        res = sql_api.post("/bills/", json=payload)
        assert res.status_code == 200
        assert res.json()["bill_number"] == f"BILL-{year}-003"

    def test_concurrent_creates_get_distinct_numbers(self, store):
        import asyncio
        from billflow.bills.models import BillCreate
        from billflow.bills.service import create_bill

        async def create_two():
            data = BillCreate(client_id=1, items=[LineItem(description="Work", quantity=1, rate=5)])
            return await asyncio.gather(create_bill(store, data), create_bill(store, data))

        first, second = asyncio.run(create_two())
        assert first.bill_number != second.bill_number


class TestBillUpdatePayloads:

    def test_null_fields_are_left_unchanged(self, api):
        before = api.get("/bills/1").json()
        res = api.put("/bills/1", json={"due_date": None, "items": None, "notes": "Net 10"})

        assert res.status_code == 200
        assert res.json()["due_date"] == before["due_date"]
        assert res.json()["total"] == before["total"]
        assert res.json()["notes"] == "Net 10"

    def test_null_fields_on_sql_store(self, sql_api):
        client = sql_api.post("/clients/", json={"name": "Acme", "email": "ap@acme.test"}).json()
        bill = sql_api.post("/bills/", json={
            "client_id": client["id"],
            "items": [{"description": "Work", "quantity": 1, "rate": 10}],
        }).json()

        res = sql_api.put(f"/bills/{bill['id']}", json={"due_date": None, "status": None})
        assert res.status_code == 200
        assert res.json()["due_date"] == bill["due_date"]

    def test_overdue_cannot_be_stored(self, api):
        res = api.put("/bills/1", json={"status": "overdue"})

        assert res.status_code == 400
        assert api.get("/bills/1").json()["status"] == "pending"

    def test_paid_can_be_set(self, api):
        assert api.put("/bills/1", json={"status": "paid"}).json()["status"] == "paid"


class TestGetBillFetches:

    def test_bill_and_clients_fetched_together(self, store):
        """Both collections are requested up front, not one after the other."""
        import asyncio
        from unittest.mock import AsyncMock, patch

        import pytest

        from billflow.bills.service import get_bill
        from billflow.errors import NotFoundError

        clients = AsyncMock(return_value=[])
        with patch.object(store.clients, "get_all", clients):
            with pytest.raises(NotFoundError):
                asyncio.run(get_bill(store, 99))

        clients.assert_awaited_once()
