from fastapi import APIRouter, Depends

from billflow.auth.service import verify_token
from billflow.store import Store, get_store
from .models import (
    CompanyProfile, CompanyUpdate, EmailUpdate, PasswordChange,
    Preferences, PreferencesUpdate, SettingsView,
)
from . import service

router = APIRouter(prefix='/settings', tags=['settings'])


@router.get('/', response_model=SettingsView)
async def get_settings(store: Store = Depends(get_store), current_user: dict = Depends(verify_token)):
    """Get company profile, preferences and security metadata"""
    return await service.get_settings(store)

@router.put('/company', response_model=CompanyProfile)
async def update_company(data: CompanyUpdate, store: Store = Depends(get_store),
                         current_user: dict = Depends(verify_token)):
    """Merge changes into the company profile"""
    return await service.update_company_info(store, data)

@router.put('/email')
async def update_email(data: EmailUpdate, store: Store = Depends(get_store),
                       current_user: dict = Depends(verify_token)):
    """Change the company email"""
    return await service.update_email(store, data.email)

@router.post('/password')
async def change_password(data: PasswordChange, store: Store = Depends(get_store),
                          current_user: dict = Depends(verify_token)):
    """Change the admin password"""
    return await service.change_password(store, data.current_password, data.new_password)

@router.put('/preferences', response_model=Preferences)
async def update_preferences(data: PreferencesUpdate, store: Store = Depends(get_store),
                             current_user: dict = Depends(verify_token)):
    """Update currency and language"""
    return await service.update_preferences(store, data)

@router.post('/reset', response_model=SettingsView)
async def reset_settings(store: Store = Depends(get_store), current_user: dict = Depends(verify_token)):
    """Restore factory defaults"""
    return await service.reset_to_defaults(store)
