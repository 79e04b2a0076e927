import asyncio
import logging
from datetime import date, timedelta
from typing import List, Optional

from billflow.bills.models import Bill, BillCreate, LineItem
from billflow.bills.service import calculate_line_items, insert_bill
from billflow.errors import ValidationError
from billflow.reports.aggregation import client_name_lookup, filter_entities
from .models import (
    QUOTATION_TRANSITIONS,
    Quotation,
    QuotationCreate,
    QuotationStatus,
    QuotationUpdate,
    QuotationView,
)

logger = logging.getLogger(__name__)

DEFAULT_VALIDITY_DAYS = 30


# ============================================================
# CREATE QUOTATION
# ============================================================

async def create_quotation(store, data: QuotationCreate) -> Quotation:
    if not data.items:
        raise ValidationError("A quotation needs at least one line item")

    # Validate client
    client = await store.clients.get_by_id(data.client_id)

    items, total = calculate_line_items(data.items)
    quotation = await store.quotations.create({
        "client_id": client.id,
        "items": items,
        "total": total,
        "valid_until": data.valid_until or date.today() + timedelta(days=DEFAULT_VALIDITY_DAYS),
        "status": QuotationStatus.DRAFT,
        "notes": data.notes,
    })

    logger.info(f"Quotation {quotation.id} created for client {client.id} ({total:.2f})")
    return quotation


# ============================================================
# GET QUOTATIONS
# ============================================================

async def get_all_quotations(store, search: str = "", status: Optional[str] = "all") -> List[QuotationView]:
    quotations, clients = await asyncio.gather(
        store.quotations.get_all(),
        store.clients.get_all(),
    )
    client_name = client_name_lookup(clients)

    views = [
        QuotationView(**q.model_dump(), client_name=client_name(q.client_id))
        for q in quotations
    ]
    return filter_entities(views, search, fields=("client_name",), filters={"status": status})


async def get_quotation(store, quotation_id: int) -> Quotation:
    return await store.quotations.get_by_id(quotation_id)


async def get_quotations_for_client(store, client_id: int) -> List[Quotation]:
    return await store.quotations.get_by("client_id", client_id)


# ============================================================
# UPDATE QUOTATION
# ============================================================

async def update_quotation(store, quotation_id: int, data: QuotationUpdate) -> Quotation:
    """Update existing quotation - only allowed for drafts"""
    quotation = await store.quotations.get_by_id(quotation_id)
    if quotation.status != QuotationStatus.DRAFT:
        raise ValidationError("Only draft quotations can be edited")

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "items" in changes:
        if not data.items:
            raise ValidationError("A quotation needs at least one line item")
        changes["items"], changes["total"] = calculate_line_items(data.items)

    updated = await store.quotations.update(quotation_id, changes)
    logger.info(f"Quotation {quotation_id} updated: {sorted(changes)}")
    return updated


async def update_status(store, quotation_id: int, status: QuotationStatus) -> Quotation:
    quotation = await store.quotations.get_by_id(quotation_id)

    allowed = QUOTATION_TRANSITIONS[quotation.status]
    if status not in allowed:
        raise ValidationError(
            f"Cannot move quotation from {quotation.status.value} to {status.value}"
        )

    updated = await store.quotations.update(quotation_id, {"status": status})
    logger.info(f"Quotation {quotation_id}: {quotation.status.value} -> {status.value}")
    return updated


# ============================================================
# DUPLICATE QUOTATION
# ============================================================

async def duplicate_quotation(store, quotation_id: int) -> Quotation:
    """Copy a quotation into a new draft"""
    original = await store.quotations.get_by_id(quotation_id)

    copy = await store.quotations.create({
        "client_id": original.client_id,
        "items": [item.model_dump() for item in original.items],
        "total": original.total,
        "valid_until": date.today() + timedelta(days=DEFAULT_VALIDITY_DAYS),
        "status": QuotationStatus.DRAFT,
        "notes": f"[DUPLICATE] {original.notes}" if original.notes else None,
    })

    logger.info(f"Quotation {quotation_id} duplicated as {copy.id}")
    return copy


# ============================================================
# CONVERT TO BILL
# ============================================================

async def convert_to_bill(store, quotation_id: int) -> Bill:
    async with store.write_lock:
        return await _convert(store, quotation_id)


async def _convert(store, quotation_id: int) -> Bill:
    quotation = await store.quotations.get_by_id(quotation_id)

    if quotation.status != QuotationStatus.ACCEPTED:
        raise ValidationError("Only accepted quotations can be converted to bills")

    if quotation.bill_id is not None:
        raise ValidationError("A bill already exists for this quotation")

    bill = await insert_bill(store, BillCreate(
        client_id=quotation.client_id,
        items=[LineItem(**item.model_dump()) for item in quotation.items],
        notes=quotation.notes,
    ))
    await store.quotations.update(quotation_id, {"bill_id": bill.id})

    logger.info(f"Quotation {quotation_id} converted to {bill.bill_number}")
    return bill


# ============================================================
# DELETE QUOTATION
# ============================================================

async def delete_quotation(store, quotation_id: int) -> dict:
    await store.quotations.delete(quotation_id)
    logger.info(f"Quotation {quotation_id} deleted")
    return {"message": "Quotation deleted successfully"}
