from fastapi import APIRouter, Depends

from billflow.auth.service import verify_token
from billflow.store import Store, get_store
from .models import DashboardReport, PaymentStats, ServiceStats
from . import service

router = APIRouter(prefix='/reports', tags=['reports'])


@router.get('/dashboard', response_model=DashboardReport)
async def get_dashboard(store: Store = Depends(get_store), current_user: dict = Depends(verify_token)):
    """Revenue, pending and overdue rollups plus the five newest bills"""
    return await service.get_dashboard(store)

@router.get('/payments', response_model=PaymentStats)
async def get_payment_stats(store: Store = Depends(get_store), current_user: dict = Depends(verify_token)):
    """Payment totals, this month's takings and per-method breakdown"""
    return await service.get_payment_stats(store)

@router.get('/services', response_model=ServiceStats)
async def get_service_stats(store: Store = Depends(get_store), current_user: dict = Depends(verify_token)):
    """Catalog size, active count and average price"""
    return await service.get_service_stats(store)
