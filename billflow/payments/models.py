from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from typing import Optional
from datetime import datetime


class PaymentMethod(str, Enum):
    CASH = "Cash"
    BANK_TRANSFER = "Bank Transfer"
    CHECK = "Check"
    CREDIT_CARD = "Credit Card"
    PAYPAL = "PayPal"


class Payment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(validation_alias=AliasChoices("id", "Id"))
    bill_id: int = Field(validation_alias=AliasChoices("bill_id", "billId"))
    amount: float
    method: PaymentMethod
    date: datetime
    notes: Optional[str] = None


class PaymentCreate(BaseModel):
    bill_id: int
    amount: float
    method: PaymentMethod = PaymentMethod.CASH
    date: Optional[datetime] = None
    notes: Optional[str] = None


class PaymentView(Payment):
    """Payment as listed: adds the bill number and client label."""
    bill_number: str
    client_name: str
