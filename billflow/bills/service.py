import asyncio
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from billflow.errors import ValidationError
from billflow.reports.aggregation import (
    client_name_lookup,
    compute_bill_status,
    filter_entities,
)
from .models import Bill, BillCreate, BillStatus, BillUpdate, BillView, LineItem

logger = logging.getLogger(__name__)


# ============================================================
# LINE ITEM CALCULATION
# ============================================================

def calculate_line_items(items: List[LineItem]) -> Tuple[List[dict], float]:
    """Derive each item's amount (quantity * rate) and the document total."""
    priced = []
    for item in items:
        data = item.model_dump()
        data["amount"] = float(item.quantity) * float(item.rate)
        priced.append(data)

    total = sum(item["amount"] for item in priced)
    return priced, total


# ============================================================
# BILL NUMBER GENERATOR
# ============================================================

def _sequence(bill_number: str, prefix: str) -> int:
    suffix = bill_number[len(prefix):]
    if bill_number.startswith(prefix) and suffix.isdigit():
        return int(suffix)
    return 0


async def generate_bill_number(store, created_at: datetime) -> str:
    """
    Next BILL-<year>-NNN number. Counts bills like the numbering always has,
    but never reuses a number still held by a bill of the same year.
    """
    prefix = f"BILL-{created_at.year}-"
    bills = await store.bills.get_all()
    highest = max((_sequence(b.bill_number, prefix) for b in bills), default=0)
    sequence = max(len(bills), highest) + 1
    return f"{prefix}{sequence:03d}"


def to_view(bill: Bill, client_name: str, now: datetime) -> BillView:
    return BillView(
        **bill.model_dump(),
        effective_status=compute_bill_status(bill, now),
        client_name=client_name,
    )


# ============================================================
# CREATE BILL
# ============================================================

async def insert_bill(store, data: BillCreate) -> Bill:
    """Create a pending bill. Callers must hold ``store.write_lock``."""
    if not data.items:
        raise ValidationError("A bill needs at least one line item")

    # Validate client
    client = await store.clients.get_by_id(data.client_id)

    created_at = datetime.now()
    items, total = calculate_line_items(data.items)
    due_date = data.due_date or (created_at + timedelta(days=client.payment_terms)).date()

    bill = await store.bills.create({
        "bill_number": await generate_bill_number(store, created_at),
        "client_id": client.id,
        "items": items,
        "total": total,
        "status": BillStatus.PENDING,
        "due_date": due_date,
        "notes": data.notes,
        "created_at": created_at,
    })

    logger.info(f"Bill {bill.bill_number} created for client {client.id} ({total:.2f})")
    return bill


async def create_bill(store, data: BillCreate) -> Bill:
    async with store.write_lock:
        return await insert_bill(store, data)


# ============================================================
# GET BILLS
# ============================================================

async def get_all_bills(store, search: str = "", status: Optional[str] = "all",
                        now: Optional[datetime] = None) -> List[BillView]:
    """Bills with effective status, searched by number and client name."""
    now = now or datetime.now()
    bills, clients = await asyncio.gather(
        store.bills.get_all(),
        store.clients.get_all(),
    )
    client_name = client_name_lookup(clients)

    views = [to_view(bill, client_name(bill.client_id), now) for bill in bills]
    return filter_entities(
        views,
        search,
        fields=("bill_number", "client_name"),
        filters={"effective_status": status},
    )


async def get_bill(store, bill_id: int, now: Optional[datetime] = None) -> BillView:
    now = now or datetime.now()
    bill, clients = await asyncio.gather(
        store.bills.get_by_id(bill_id),
        store.clients.get_all(),
    )
    return to_view(bill, client_name_lookup(clients)(bill.client_id), now)


async def get_bills_for_client(store, client_id: int) -> List[Bill]:
    return await store.bills.get_by("client_id", client_id)


# ============================================================
# UPDATE BILL
# ============================================================

async def update_bill(store, bill_id: int, data: BillUpdate) -> Bill:
    # null means "leave unchanged"
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    if changes.get("status") == BillStatus.OVERDUE:
        raise ValidationError("Overdue is derived from the due date and cannot be set")

    if "items" in changes:
        if not data.items:
            raise ValidationError("A bill needs at least one line item")
        changes["items"], changes["total"] = calculate_line_items(data.items)

    bill = await store.bills.update(bill_id, changes)
    logger.info(f"Bill {bill_id} updated: {sorted(changes)}")
    return bill


async def mark_as_paid(store, bill_id: int) -> Bill:
    bill = await store.bills.update(bill_id, {"status": BillStatus.PAID})
    logger.info(f"Bill {bill.bill_number} marked as paid")
    return bill


# ============================================================
# DELETE BILL
# ============================================================

async def delete_bill(store, bill_id: int) -> dict:
    await store.bills.delete(bill_id)
    logger.info(f"Bill {bill_id} deleted")
    return {"message": "Bill deleted successfully"}
