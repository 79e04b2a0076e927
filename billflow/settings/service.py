import logging
from datetime import datetime

from billflow.auth.service import get_password_hash, verify_password
from billflow.config import settings as env
from billflow.errors import ValidationError
from .models import (
    CURRENCY_SYMBOLS,
    LANGUAGES,
    MIN_PASSWORD_LENGTH,
    CompanyProfile,
    CompanyUpdate,
    Preferences,
    PreferencesUpdate,
    SecurityInfo,
    SecurityView,
    Settings,
    SettingsView,
)

logger = logging.getLogger(__name__)


# ============================================================
# DEFAULTS
# ============================================================

def default_settings(username: str = None, password: str = None) -> Settings:
    """Factory defaults: empty company profile, USD/en, seeded admin login."""
    return Settings(
        company=CompanyProfile(),
        preferences=Preferences(),
        security=SecurityInfo(
            username=username or env.admin_username,
            password_hash=get_password_hash(password or env.admin_password),
        ),
    )


def to_view(current: Settings) -> SettingsView:
    return SettingsView(
        company=current.company,
        preferences=current.preferences,
        security=SecurityView(
            username=current.security.username,
            password_changed_at=current.security.password_changed_at,
        ),
        currency_symbol=CURRENCY_SYMBOLS.get(current.preferences.currency, "$"),
    )


def _validate_email(email: str):
    if not email or "@" not in email:
        raise ValidationError("Valid email address is required")


# ============================================================
# READ
# ============================================================

async def get_settings(store) -> SettingsView:
    return to_view(await store.settings.get())


# ============================================================
# COMPANY PROFILE
# ============================================================

async def update_company_info(store, data: CompanyUpdate) -> CompanyProfile:
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in changes and changes["email"]:
        _validate_email(changes["email"])

    current = await store.settings.get()
    current.company = CompanyProfile.model_validate({**current.company.model_dump(), **changes})
    saved = await store.settings.save(current)

    logger.info(f"Company profile updated: {sorted(changes)}")
    return saved.company


async def update_email(store, email: str) -> dict:
    _validate_email(email)

    current = await store.settings.get()
    current.company.email = email
    await store.settings.save(current)

    logger.info("Company email updated")
    return {"success": True}


# ============================================================
# SECURITY
# ============================================================

async def change_password(store, current_password: str, new_password: str) -> dict:
    if not current_password:
        raise ValidationError("Current password is required")

    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    current = await store.settings.get()
    if not verify_password(current_password, current.security.password_hash):
        raise ValidationError("Current password is incorrect")

    current.security.password_hash = get_password_hash(new_password)
    current.security.password_changed_at = datetime.now()
    await store.settings.save(current)

    logger.info(f"Password changed for {current.security.username}")
    return {"success": True}


# ============================================================
# PREFERENCES
# ============================================================

async def update_preferences(store, data: PreferencesUpdate) -> Preferences:
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    if "currency" in changes and changes["currency"] not in CURRENCY_SYMBOLS:
        raise ValidationError(
            f"Unsupported currency. Must be one of: {list(CURRENCY_SYMBOLS)}"
        )
    if "language" in changes and changes["language"] not in LANGUAGES:
        raise ValidationError(f"Unsupported language. Must be one of: {LANGUAGES}")

    current = await store.settings.get()
    current.preferences = current.preferences.model_copy(update=changes)
    saved = await store.settings.save(current)

    logger.info(f"Preferences updated: {changes}")
    return saved.preferences


async def reset_to_defaults(store) -> SettingsView:
    restored = await store.settings.reset()
    logger.info("Settings reset to defaults")
    return to_view(restored)
