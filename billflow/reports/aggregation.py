"""
Aggregation engine.

Pure functions computing derived, read-only views over entity collections:
effective bill status, client billing summaries, bill payment progress,
dashboard rollups, payment statistics and the search/filter combinator the
list endpoints share.

Nothing here performs I/O or reads the clock; callers pass ``now``.
Records are taken as given: totals are not re-validated against their line
items, and dangling references resolve to sentinel labels instead of
raising.
"""

from datetime import date, datetime, time
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from billflow.bills.models import BillStatus
from .models import (
    ClientBillingSummary,
    DashboardSummary,
    PaymentProgress,
    PaymentStats,
    ServiceStats,
)

UNKNOWN_CLIENT = "Unknown Client"
UNKNOWN_BILL = "Unknown Bill"

# Filter value matching anything
ALL = "all"

FieldSpec = Union[str, Callable[[Any], Any]]


# ============================================================
# STATUS DERIVATION
# ============================================================

def _as_datetime(value: Union[date, datetime], reference: datetime) -> datetime:
    """Date-only values become midnight; naive values borrow the reference tz."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None and reference.tzinfo is not None:
        value = value.replace(tzinfo=reference.tzinfo)
    elif value.tzinfo is not None and reference.tzinfo is None:
        value = value.replace(tzinfo=None)
    return value


def compute_bill_status(bill, now: datetime) -> BillStatus:
    """
    Effective display status of a bill.

    A pending bill whose due date has strictly passed is reported as overdue.
    Any other bill keeps its stored status.
    """
    status = BillStatus(bill.status)
    if status == BillStatus.PENDING and now > _as_datetime(bill.due_date, now):
        return BillStatus.OVERDUE
    return status


# ============================================================
# CLIENT + BILL SUMMARIES
# ============================================================

def summarize_client_billing(client_id: int, bills: Iterable, payments: Iterable = (),
                             now: Optional[datetime] = None) -> ClientBillingSummary:
    """
    Billing totals for one client, bucketed by effective status.

    Amounts come from bill totals. ``payments`` is accepted for callers that
    already hold it but does not change the figures.
    """
    now = now or datetime.now()
    summary = ClientBillingSummary()

    for bill in bills:
        if bill.client_id != client_id:
            continue
        summary.total_bills += 1
        summary.total_billed += bill.total

        status = compute_bill_status(bill, now)
        if status == BillStatus.PAID:
            summary.paid_amount += bill.total
        elif status == BillStatus.OVERDUE:
            summary.overdue_amount += bill.total
        else:
            summary.pending_amount += bill.total

    return summary


def compute_bill_payment_progress(bill, payments: Iterable) -> PaymentProgress:
    """Paid total, remaining balance and percentage for a single bill."""
    total_paid = sum(p.amount for p in payments if p.bill_id == bill.id)

    if bill.total == 0:
        percent_paid = 0.0
    else:
        percent_paid = min(max(total_paid / bill.total * 100, 0.0), 100.0)

    return PaymentProgress(
        total_paid=total_paid,
        # Overpayment shows up as a negative balance
        remaining=bill.total - total_paid,
        percent_paid=percent_paid,
    )


# ============================================================
# DASHBOARD + PAYMENT ROLLUPS
# ============================================================

def summarize_dashboard(bills: Sequence, clients: Sequence, now: datetime) -> DashboardSummary:
    """
    Business-wide revenue rollup.

    ``this_month_revenue`` matches on the month number of ``created_at``
    only, so paid bills from the same month of an earlier year are counted
    too. Payment statistics compare month and year.
    """
    summary = DashboardSummary(total_clients=len(clients), total_bills=len(bills))

    for bill in bills:
        status = compute_bill_status(bill, now)
        if status == BillStatus.PAID:
            summary.total_revenue += bill.total
            if bill.created_at.month == now.month:
                summary.this_month_revenue += bill.total
        elif status == BillStatus.OVERDUE:
            summary.overdue_amount += bill.total
        else:
            summary.pending_amount += bill.total

    return summary


def _method_key(method) -> str:
    return method.value if isinstance(method, Enum) else str(method)


def summarize_payment_stats(payments: Sequence, now: Optional[datetime] = None) -> PaymentStats:
    now = now or datetime.now()
    stats = PaymentStats(total_count=len(payments))
    breakdown: Dict[str, float] = {}

    for payment in payments:
        stats.total_payments += payment.amount
        if payment.date.month == now.month and payment.date.year == now.year:
            stats.this_month_payments += payment.amount

        key = _method_key(payment.method)
        breakdown[key] = breakdown.get(key, 0.0) + payment.amount

    stats.method_breakdown = breakdown
    return stats


def summarize_services(services: Sequence) -> ServiceStats:
    if not services:
        return ServiceStats()
    return ServiceStats(
        total_services=len(services),
        active_services=sum(1 for s in services if s.is_active),
        average_price=sum(s.price for s in services) / len(services),
    )


# ============================================================
# LOOKUPS + ORDERING
# ============================================================

def client_name_lookup(clients: Iterable) -> Callable[[int], str]:
    """Map client ids to names, falling back to UNKNOWN_CLIENT."""
    names = {c.id: c.name for c in clients}
    return lambda client_id: names.get(client_id, UNKNOWN_CLIENT)


def bill_label_lookup(bills: Iterable, clients: Iterable) -> Callable[[int], Tuple[str, str]]:
    """Map bill ids to ``(bill_number, client_name)`` with sentinel fallbacks."""
    client_name = client_name_lookup(clients)
    labels = {b.id: (b.bill_number, client_name(b.client_id)) for b in bills}
    return lambda bill_id: labels.get(bill_id, (UNKNOWN_BILL, UNKNOWN_CLIENT))


def client_payment_history(bills: Iterable, payments: Iterable) -> List:
    """Payments made against any of ``bills``, newest first."""
    bill_ids = {b.id for b in bills}
    history = [p for p in payments if p.bill_id in bill_ids]
    return sorted(history, key=lambda p: p.date, reverse=True)


def recent_bills(bills: Iterable, limit: int = 5) -> List:
    return sorted(bills, key=lambda b: b.created_at, reverse=True)[:limit]


# ============================================================
# SEARCH + FILTER
# ============================================================

def _field_value(entity, field: FieldSpec):
    value = field(entity) if callable(field) else getattr(entity, field, None)
    if value is None:
        return ""
    if isinstance(value, Enum):
        return value.value
    return value


def filter_entities(collection: Iterable, search: Optional[str] = "",
                    fields: Sequence[FieldSpec] = (),
                    filters: Optional[Mapping[FieldSpec, Any]] = None) -> List:
    """
    Case-insensitive substring search combined (AND) with equality filters.

    ``fields`` and the keys of ``filters`` are attribute names or callables
    taking the entity. A filter value of ``"all"`` or ``None`` matches
    anything; an empty search matches everything. Order is preserved.
    """
    needle = (search or "").lower()
    active = {
        field: expected
        for field, expected in (filters or {}).items()
        if expected is not None and expected != ALL
    }

    def matches(entity) -> bool:
        if needle and fields:
            if not any(needle in str(_field_value(entity, f)).lower() for f in fields):
                return False
        return all(_field_value(entity, f) == expected for f, expected in active.items())

    return [entity for entity in collection if matches(entity)]
