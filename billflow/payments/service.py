import asyncio
import logging
from datetime import datetime
from typing import List, Optional

from billflow.bills.models import BillStatus
from billflow.errors import ValidationError
from billflow.reports.aggregation import bill_label_lookup, filter_entities
from .models import Payment, PaymentCreate, PaymentView

logger = logging.getLogger(__name__)


# ============================================================
# RECORD PAYMENT
# ============================================================

async def create_payment(store, data: PaymentCreate) -> Payment:
    """
    Record a payment against a bill. The bill switches to paid once the
    recorded payments cover its total.
    """
    if data.amount <= 0:
        raise ValidationError("Payment amount must be greater than zero")

    async with store.write_lock:
        return await _record_payment(store, data)


async def _record_payment(store, data: PaymentCreate) -> Payment:
    bill, existing = await asyncio.gather(
        store.bills.get_by_id(data.bill_id),
        store.payments.get_by("bill_id", data.bill_id),
    )

    total_paid = sum(p.amount for p in existing)
    remaining = bill.total - total_paid
    if round(data.amount, 2) > round(remaining, 2):
        raise ValidationError(
            f"Payment of {data.amount:.2f} exceeds the remaining balance of {remaining:.2f}"
        )

    payment = await store.payments.create({
        "bill_id": bill.id,
        "amount": data.amount,
        "method": data.method,
        "date": data.date or datetime.now(),
        "notes": data.notes,
    })
    logger.info(f"Payment {payment.id} of {payment.amount:.2f} recorded for {bill.bill_number}")

    if total_paid + data.amount >= bill.total and bill.status != BillStatus.PAID:
        await store.bills.update(bill.id, {"status": BillStatus.PAID})
        logger.info(f"Bill {bill.bill_number} fully paid")

    return payment


# ============================================================
# GET PAYMENTS
# ============================================================

async def get_all_payments(store, search: str = "", method: Optional[str] = "all") -> List[PaymentView]:
    """Payments labelled with bill number and client, newest first."""
    payments, bills, clients = await asyncio.gather(
        store.payments.get_all(),
        store.bills.get_all(),
        store.clients.get_all(),
    )
    label = bill_label_lookup(bills, clients)

    views = []
    for payment in sorted(payments, key=lambda p: p.date, reverse=True):
        bill_number, client_name = label(payment.bill_id)
        views.append(PaymentView(
            **payment.model_dump(),
            bill_number=bill_number,
            client_name=client_name,
        ))

    return filter_entities(
        views,
        search,
        fields=("bill_number", "client_name", "method"),
        filters={"method": method},
    )


async def get_payment(store, payment_id: int) -> Payment:
    return await store.payments.get_by_id(payment_id)


async def get_payments_for_bill(store, bill_id: int) -> List[Payment]:
    return await store.payments.get_by("bill_id", bill_id)
