from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from typing import Optional
from datetime import datetime


class ServiceCategory(str, Enum):
    DESIGN = "Design"
    DEVELOPMENT = "Development"
    MARKETING = "Marketing"
    WRITING = "Writing"
    CONSULTING = "Consulting"
    OTHER = "Other"


class ServiceUnit(str, Enum):
    PROJECT = "project"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    PIECE = "piece"


class ServiceBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str = Field(validation_alias=AliasChoices("name", "Name"))
    description: str = ""
    category: ServiceCategory = ServiceCategory.OTHER
    price: float = Field(ge=0)
    unit: ServiceUnit = ServiceUnit.PROJECT


class Service(ServiceBase):
    id: int = Field(validation_alias=AliasChoices("id", "Id"))
    is_active: bool = Field(default=True, validation_alias=AliasChoices("is_active", "isActive"))
    created_at: datetime = Field(validation_alias=AliasChoices("created_at", "createdAt"))


class ServiceCreate(ServiceBase):
    pass


class ServiceUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[ServiceCategory] = None
    price: Optional[float] = Field(default=None, ge=0)
    unit: Optional[ServiceUnit] = None
    is_active: Optional[bool] = None
