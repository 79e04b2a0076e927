from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from typing import List, Optional
from datetime import datetime


class ClientBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str = Field(validation_alias=AliasChoices("name", "Name"))
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    payment_terms: int = Field(
        default=30,
        gt=0,
        validation_alias=AliasChoices("payment_terms", "paymentTerms"),
    )


class Client(ClientBase):
    id: int = Field(validation_alias=AliasChoices("id", "Id"))
    created_at: datetime = Field(validation_alias=AliasChoices("created_at", "createdAt"))


class ClientCreate(ClientBase):
    pass


class ClientUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    payment_terms: Optional[int] = Field(default=None, gt=0)


class ClientImportSummary(BaseModel):
    filename: str
    total_rows: int
    inserted: int
    updated: int
    skipped: int
    errors: List[str] = Field(default_factory=list)
