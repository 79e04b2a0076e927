from fastapi import APIRouter, Depends
from typing import List

from billflow.auth.service import verify_token
from billflow.store import Store, get_store
from .models import Payment, PaymentCreate, PaymentView
from . import service

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/", response_model=Payment)
async def add_payment(data: PaymentCreate, store: Store = Depends(get_store),
                      current_user: dict = Depends(verify_token)):
    """Record a payment against a bill"""
    return await service.create_payment(store, data)


@router.get("/", response_model=List[PaymentView])
async def get_payments(search: str = "", method: str = "all", store: Store = Depends(get_store),
                       current_user: dict = Depends(verify_token)):
    """List payments, searching bill number, client and method"""
    return await service.get_all_payments(store, search, method)


@router.get("/{payment_id}", response_model=Payment)
async def get_payment(payment_id: int, store: Store = Depends(get_store),
                      current_user: dict = Depends(verify_token)):
    return await service.get_payment(store, payment_id)
