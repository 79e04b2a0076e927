"""
Report loaders: fetch the collections a view needs concurrently, then run
the aggregation engine over them in memory. A failed fetch fails the whole
report.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional

from billflow.bills.service import to_view as bill_view
from . import aggregation
from .models import ClientReport, DashboardReport, PaymentProgress, PaymentStats, ServiceStats

logger = logging.getLogger(__name__)


# ============================================================
# DASHBOARD
# ============================================================

async def get_dashboard(store, now: Optional[datetime] = None) -> DashboardReport:
    now = now or datetime.now()
    bills, clients = await asyncio.gather(
        store.bills.get_all(),
        store.clients.get_all(),
    )

    client_name = aggregation.client_name_lookup(clients)
    recent = [
        bill_view(bill, client_name(bill.client_id), now)
        for bill in aggregation.recent_bills(bills)
    ]

    logger.debug(f"Dashboard over {len(bills)} bills and {len(clients)} clients")
    return DashboardReport(
        summary=aggregation.summarize_dashboard(bills, clients, now),
        recent_bills=recent,
    )


# ============================================================
# CLIENT DETAIL
# ============================================================

async def get_client_report(store, client_id: int, now: Optional[datetime] = None) -> ClientReport:
    now = now or datetime.now()
    client, bills, payments = await asyncio.gather(
        store.clients.get_by_id(client_id),
        store.bills.get_by("client_id", client_id),
        store.payments.get_all(),
    )

    return ClientReport(
        client=client,
        summary=aggregation.summarize_client_billing(client_id, bills, payments, now),
        bills=[bill_view(bill, client.name, now) for bill in bills],
        payment_history=aggregation.client_payment_history(bills, payments),
    )


# ============================================================
# BILL PAYMENT PROGRESS
# ============================================================

async def get_bill_progress(store, bill_id: int) -> PaymentProgress:
    bill, payments = await asyncio.gather(
        store.bills.get_by_id(bill_id),
        store.payments.get_by("bill_id", bill_id),
    )
    return aggregation.compute_bill_payment_progress(bill, payments)


# ============================================================
# PAYMENTS + SERVICES
# ============================================================

async def get_payment_stats(store, now: Optional[datetime] = None) -> PaymentStats:
    payments = await store.payments.get_all()
    return aggregation.summarize_payment_stats(payments, now or datetime.now())


async def get_service_stats(store) -> ServiceStats:
    return aggregation.summarize_services(await store.services.get_all())
