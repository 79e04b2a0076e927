from pydantic import BaseModel, Field
from typing import Dict, List

from billflow.bills.models import BillView
from billflow.clients.models import Client
from billflow.payments.models import Payment


class ClientBillingSummary(BaseModel):
    total_bills: int = 0
    total_billed: float = 0.0
    paid_amount: float = 0.0
    pending_amount: float = 0.0
    overdue_amount: float = 0.0


class PaymentProgress(BaseModel):
    total_paid: float = 0.0
    remaining: float = 0.0
    percent_paid: float = 0.0


class DashboardSummary(BaseModel):
    total_revenue: float = 0.0
    pending_amount: float = 0.0
    overdue_amount: float = 0.0
    this_month_revenue: float = 0.0
    total_clients: int = 0
    total_bills: int = 0


class PaymentStats(BaseModel):
    total_payments: float = 0.0
    total_count: int = 0
    this_month_payments: float = 0.0
    method_breakdown: Dict[str, float] = Field(default_factory=dict)


class ServiceStats(BaseModel):
    total_services: int = 0
    active_services: int = 0
    average_price: float = 0.0


# -----------------------------
# Composite report views
# -----------------------------
class DashboardReport(BaseModel):
    summary: DashboardSummary
    recent_bills: List[BillView]


class ClientReport(BaseModel):
    client: Client
    summary: ClientBillingSummary
    bills: List[BillView]
    payment_history: List[Payment]
