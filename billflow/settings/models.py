from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from typing import Optional
from datetime import datetime


# Supported display currencies and their symbols
CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "CAD": "C$",
    "AUD": "A$",
    "JPY": "¥",
    "MXN": "$",
    "BRL": "R$",
    "GHS": "₵",
    "NGN": "₦",
    "ZAR": "R",
    "XOF": "CFA",
}

LANGUAGES = ["en", "es", "fr", "de", "it", "pt"]

MIN_PASSWORD_LENGTH = 8


class CompanyProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    website: str = ""
    tax_id: str = Field(default="", validation_alias=AliasChoices("tax_id", "taxId"))


class Preferences(BaseModel):
    currency: str = "USD"
    language: str = "en"


class SecurityInfo(BaseModel):
    username: str = "admin"
    password_hash: str = ""
    password_changed_at: Optional[datetime] = None


class Settings(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    company: CompanyProfile = Field(default_factory=CompanyProfile)
    preferences: Preferences = Field(default_factory=Preferences)
    security: SecurityInfo = Field(default_factory=SecurityInfo)


# -----------------------------
# Payloads
# -----------------------------
class CompanyUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    website: Optional[str] = None
    tax_id: Optional[str] = None


class PreferencesUpdate(BaseModel):
    currency: Optional[str] = None
    language: Optional[str] = None


class EmailUpdate(BaseModel):
    email: str


class PasswordChange(BaseModel):
    current_password: str
    new_password: str


# -----------------------------
# Public view (never exposes the password hash)
# -----------------------------
class SecurityView(BaseModel):
    username: str
    password_changed_at: Optional[datetime] = None


class SettingsView(BaseModel):
    company: CompanyProfile
    preferences: Preferences
    security: SecurityView
    currency_symbol: str
