from fastapi import APIRouter, Depends
from typing import List

from billflow.auth.service import verify_token
from billflow.payments.models import Payment
from billflow.payments.service import get_payments_for_bill
from billflow.reports import service as reports
from billflow.reports.models import PaymentProgress
from billflow.store import Store, get_store
from .models import Bill, BillCreate, BillUpdate, BillView
from . import service

router = APIRouter(prefix='/bills', tags=['bills'])


@router.post('/', response_model=Bill)
async def create_bill(bill: BillCreate, store: Store = Depends(get_store),
                      current_user: dict = Depends(verify_token)):
    """Create a new pending bill"""
    return await service.create_bill(store, bill)


@router.get('/', response_model=List[BillView])
async def get_bills(search: str = "", status: str = "all", store: Store = Depends(get_store),
                    current_user: dict = Depends(verify_token)):
    """List bills; status filters on the effective (overdue-aware) status"""
    return await service.get_all_bills(store, search, status)


@router.get('/{bill_id}', response_model=BillView)
async def get_bill(bill_id: int, store: Store = Depends(get_store),
                   current_user: dict = Depends(verify_token)):
    return await service.get_bill(store, bill_id)


@router.get('/{bill_id}/progress', response_model=PaymentProgress)
async def get_bill_progress(bill_id: int, store: Store = Depends(get_store),
                            current_user: dict = Depends(verify_token)):
    """Paid total, remaining balance and percentage paid"""
    return await reports.get_bill_progress(store, bill_id)


@router.get('/{bill_id}/payments', response_model=List[Payment])
async def get_bill_payments(bill_id: int, store: Store = Depends(get_store),
                            current_user: dict = Depends(verify_token)):
    await store.bills.get_by_id(bill_id)
    return await get_payments_for_bill(store, bill_id)


@router.put('/{bill_id}', response_model=Bill)
async def update_bill(bill_id: int, bill: BillUpdate, store: Store = Depends(get_store),
                      current_user: dict = Depends(verify_token)):
    return await service.update_bill(store, bill_id, bill)


@router.post('/{bill_id}/mark-paid', response_model=Bill)
async def mark_bill_paid(bill_id: int, store: Store = Depends(get_store),
                         current_user: dict = Depends(verify_token)):
    return await service.mark_as_paid(store, bill_id)


@router.delete('/{bill_id}')
async def delete_bill(bill_id: int, store: Store = Depends(get_store),
                      current_user: dict = Depends(verify_token)):
    return await service.delete_bill(store, bill_id)
