"""
Payment endpoints: recording against a bill's balance and listing.
"""


class TestRecordPayment:

    def test_partial_payment_keeps_bill_pending(self, api):
        res = api.post("/payments/", json={"bill_id": 1, "amount": 100, "method": "Check"})
        assert res.status_code == 200
        assert res.json()["method"] == "Check"

        assert api.get("/bills/1").json()["status"] == "pending"
        assert api.get("/bills/1/progress").json()["total_paid"] == 500.0

    def test_settling_payment_marks_bill_paid(self, api):
        res = api.post("/payments/", json={"bill_id": 1, "amount": 600})
        assert res.status_code == 200
        assert res.json()["method"] == "Cash"

        assert api.get("/bills/1").json()["status"] == "paid"

    def test_overpayment_rejected(self, api):
        res = api.post("/payments/", json={"bill_id": 1, "amount": 600.01})
        assert res.status_code == 400
        assert "remaining balance" in res.json()["detail"]

    def test_non_positive_amount(self, api):
        assert api.post("/payments/", json={"bill_id": 1, "amount": 0}).status_code == 400
        assert api.post("/payments/", json={"bill_id": 1, "amount": -5}).status_code == 400

    def test_unknown_bill(self, api):
        assert api.post("/payments/", json={"bill_id": 99, "amount": 10}).status_code == 404

    def test_unknown_method(self, api):
        res = api.post("/payments/", json={"bill_id": 1, "amount": 10, "method": "Barter"})
        assert res.status_code == 422


class TestListPayments:

    def test_newest_first_with_labels(self, api):
        payments = api.get("/payments/").json()

        assert [p["id"] for p in payments] == [1, 2]
        assert payments[0]["bill_number"] == "BILL-2024-003"
        assert payments[0]["client_name"] == "Globex"

    def test_method_filter(self, api):
        assert [p["id"] for p in api.get("/payments/?method=Cash").json()] == [2]

    def test_search_by_client(self, api):
        assert [p["id"] for p in api.get("/payments/?search=acme").json()] == [2]

    def test_search_by_method(self, api):
        assert [p["id"] for p in api.get("/payments/?search=transfer").json()] == [1]

    def test_get_single(self, api):
        assert api.get("/payments/2").json()["amount"] == 400.0
        assert api.get("/payments/9").status_code == 404


class TestConcurrentPayments:

    def test_balance_check_holds_under_concurrency(self, store):
        """Two payments racing for the same balance: only one fits."""
        import asyncio
        from billflow.errors import ValidationError
        from billflow.payments.models import PaymentCreate
        from billflow.payments.service import create_payment

        async def pay_twice():
            data = PaymentCreate(bill_id=2, amount=400)
            return await asyncio.gather(
                create_payment(store, data),
                create_payment(store, data),
                return_exceptions=True,
            )

        results = asyncio.run(pay_twice())

        assert sum(isinstance(r, ValidationError) for r in results) == 1
        paid = asyncio.run(store.payments.get_by("bill_id", 2))
        assert sum(p.amount for p in paid) == 400
