"""
Quotation endpoints: drafting, status transitions, duplication and
conversion into bills.
"""

from datetime import date, datetime, timedelta


def send_and_accept(api, quotation_id=1):
    assert api.patch(f"/quotations/{quotation_id}/status", json={"status": "sent"}).status_code == 200
    assert api.patch(f"/quotations/{quotation_id}/status", json={"status": "accepted"}).status_code == 200


class TestCreateQuotation:

    def test_create_defaults(self, api):
        res = api.post("/quotations/", json={
            "client_id": 1,
            "items": [{"description": "Audit", "quantity": 4, "rate": 25}],
        })
        assert res.status_code == 200
        quotation = res.json()

        assert quotation["status"] == "draft"
        assert quotation["total"] == 100.0
        assert quotation["bill_id"] is None
        assert date.fromisoformat(quotation["valid_until"]) == date.today() + timedelta(days=30)

    def test_unknown_client(self, api):
        res = api.post("/quotations/", json={
            "client_id": 9,
            "items": [{"description": "Audit", "quantity": 1, "rate": 1}],
        })
        assert res.status_code == 404


class TestListQuotations:

    def test_labels_and_filters(self, api):
        quotations = api.get("/quotations/").json()
        assert quotations[0]["client_name"] == "Globex"

        assert len(api.get("/quotations/?status=draft").json()) == 1
        assert api.get("/quotations/?status=sent").json() == []
        assert api.get("/quotations/?search=acme").json() == []


class TestStatusTransitions:

    def test_draft_to_sent_to_accepted(self, api):
        send_and_accept(api)
        assert api.get("/quotations/1").json()["status"] == "accepted"

    def test_cannot_skip_sent(self, api):
        res = api.patch("/quotations/1/status", json={"status": "accepted"})
        assert res.status_code == 400
        assert res.json()["detail"] == "Cannot move quotation from draft to accepted"

    def test_terminal_states(self, api):
        api.patch("/quotations/1/status", json={"status": "sent"})
        api.patch("/quotations/1/status", json={"status": "rejected"})
        assert api.patch("/quotations/1/status", json={"status": "sent"}).status_code == 400

    def test_only_drafts_are_editable(self, api):
        res = api.put("/quotations/1", json={"items": [{"description": "Redesign", "quantity": 1, "rate": 500}]})
        assert res.status_code == 200
        assert res.json()["total"] == 500.0

        api.patch("/quotations/1/status", json={"status": "sent"})
        res = api.put("/quotations/1", json={"notes": "late change"})
        assert res.status_code == 400


class TestDuplicateAndConvert:

    def test_duplicate_is_a_new_draft(self, api):
        api.put("/quotations/1", json={"notes": "Phase one"})
        api.patch("/quotations/1/status", json={"status": "sent"})

        res = api.post("/quotations/1/duplicate")
        copy = res.json()

        assert copy["id"] == 2
        assert copy["status"] == "draft"
        assert copy["total"] == 800.0
        assert copy["notes"] == "[DUPLICATE] Phase one"

    def test_convert_accepted_quotation(self, api):
        send_and_accept(api)

        res = api.post("/quotations/1/convert")
        assert res.status_code == 200
        bill = res.json()

        assert bill["bill_number"] == f"BILL-{datetime.now().year}-004"
        assert bill["client_id"] == 2
        assert bill["total"] == 800.0
        assert bill["status"] == "pending"
        assert api.get("/quotations/1").json()["bill_id"] == bill["id"]

    def test_convert_only_once(self, api):
        send_and_accept(api)
        api.post("/quotations/1/convert")

        res = api.post("/quotations/1/convert")
        assert res.status_code == 400
        assert len(api.get("/bills/").json()) == 4

    def test_convert_requires_acceptance(self, api):
        assert api.post("/quotations/1/convert").status_code == 400

    def test_delete(self, api):
        assert api.delete("/quotations/1").status_code == 200
        assert api.get("/quotations/1").status_code == 404


class TestConcurrentConvert:

    def test_only_one_bill_per_quotation(self, tmp_path):
        import asyncio
        from billflow.errors import ValidationError
        from billflow.quotations.models import QuotationCreate, QuotationStatus
        from billflow.quotations import service
        from billflow.bills.models import LineItem
        from billflow.settings.models import Settings
        from billflow.store import sql_store

        store = sql_store(Settings(), f"sqlite:///{tmp_path / 'convert.db'}")

        async def scenario():
            client = await store.clients.create({"name": "Acme", "email": "ap@acme.test"})
            quotation = await service.create_quotation(store, QuotationCreate(
                client_id=client.id,
                items=[LineItem(description="Redesign", quantity=1, rate=800)],
            ))
            await service.update_status(store, quotation.id, QuotationStatus.SENT)
            await service.update_status(store, quotation.id, QuotationStatus.ACCEPTED)

            results = await asyncio.gather(
                service.convert_to_bill(store, quotation.id),
                service.convert_to_bill(store, quotation.id),
                return_exceptions=True,
            )
            return results, await store.bills.count()

        results, bill_count = asyncio.run(scenario())

        assert sum(isinstance(r, ValidationError) for r in results) == 1
        assert bill_count == 1


class TestQuotationUpdatePayloads:

    def test_null_fields_are_ignored(self, api):
        res = api.put("/quotations/1", json={"items": None, "valid_until": None, "notes": "v2"})

        assert res.status_code == 200
        assert res.json()["total"] == 800.0
        assert res.json()["notes"] == "v2"
