from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from typing import List, Optional
from datetime import date, datetime

from billflow.bills.models import LineItem


class QuotationStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# Allowed status moves; accepted and rejected are terminal
QUOTATION_TRANSITIONS = {
    QuotationStatus.DRAFT: {QuotationStatus.SENT},
    QuotationStatus.SENT: {QuotationStatus.ACCEPTED, QuotationStatus.REJECTED},
    QuotationStatus.ACCEPTED: set(),
    QuotationStatus.REJECTED: set(),
}


class Quotation(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(validation_alias=AliasChoices("id", "Id"))
    client_id: int = Field(validation_alias=AliasChoices("client_id", "clientId"))
    items: List[LineItem] = []
    total: float = 0.0
    valid_until: date = Field(validation_alias=AliasChoices("valid_until", "validUntil"))
    status: QuotationStatus = QuotationStatus.DRAFT
    notes: Optional[str] = None
    # Set once the quotation has been converted into a bill
    bill_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("bill_id", "billId"))
    created_at: datetime = Field(validation_alias=AliasChoices("created_at", "createdAt"))


class QuotationCreate(BaseModel):
    client_id: int
    items: List[LineItem]
    valid_until: Optional[date] = None
    notes: Optional[str] = None


class QuotationUpdate(BaseModel):
    items: Optional[List[LineItem]] = None
    valid_until: Optional[date] = None
    notes: Optional[str] = None


class StatusUpdate(BaseModel):
    status: QuotationStatus


class QuotationView(Quotation):
    client_name: str
