from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from typing import List, Optional
from datetime import date, datetime


class BillStatus(str, Enum):
    """Stored bill status. OVERDUE is normally derived at read time."""
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


# -----------------------------
# Line items (shared with quotations)
# -----------------------------
class LineItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    description: str
    quantity: float = Field(default=1, ge=0)
    rate: float = Field(default=0.0, ge=0)
    amount: float = 0.0


# -----------------------------
# Stored bill
# -----------------------------
class Bill(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(validation_alias=AliasChoices("id", "Id"))
    bill_number: str = Field(validation_alias=AliasChoices("bill_number", "billNumber"))
    client_id: int = Field(validation_alias=AliasChoices("client_id", "clientId"))
    items: List[LineItem] = []
    total: float = 0.0
    status: BillStatus = BillStatus.PENDING
    due_date: date = Field(validation_alias=AliasChoices("due_date", "dueDate"))
    notes: Optional[str] = None
    created_at: datetime = Field(validation_alias=AliasChoices("created_at", "createdAt"))


# -----------------------------
# Payloads
# -----------------------------
class BillCreate(BaseModel):
    client_id: int
    items: List[LineItem]
    due_date: Optional[date] = None
    notes: Optional[str] = None


class BillUpdate(BaseModel):
    items: Optional[List[LineItem]] = None
    due_date: Optional[date] = None
    status: Optional[BillStatus] = None
    notes: Optional[str] = None


# -----------------------------
# Response views
# -----------------------------
class BillView(Bill):
    """Bill as listed: adds the effective status and the client label."""
    effective_status: BillStatus
    client_name: str
