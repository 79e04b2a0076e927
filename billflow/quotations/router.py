from fastapi import APIRouter, Depends
from typing import List

from billflow.auth.service import verify_token
from billflow.bills.models import Bill
from billflow.store import Store, get_store
from .models import Quotation, QuotationCreate, QuotationUpdate, QuotationView, StatusUpdate
from . import service

router = APIRouter(prefix='/quotations', tags=['quotations'])


@router.post('/', response_model=Quotation)
async def create_quotation(quotation: QuotationCreate, store: Store = Depends(get_store),
                           current_user: dict = Depends(verify_token)):
    """Create a new draft quotation"""
    return await service.create_quotation(store, quotation)


@router.get('/', response_model=List[QuotationView])
async def get_quotations(search: str = "", status: str = "all", store: Store = Depends(get_store),
                         current_user: dict = Depends(verify_token)):
    """Get all quotations with optional search and status filter"""
    return await service.get_all_quotations(store, search, status)


@router.get('/{quotation_id}', response_model=Quotation)
async def get_quotation(quotation_id: int, store: Store = Depends(get_store),
                        current_user: dict = Depends(verify_token)):
    """Get a single quotation"""
    return await service.get_quotation(store, quotation_id)


@router.put('/{quotation_id}', response_model=Quotation)
async def update_quotation(quotation_id: int, quotation: QuotationUpdate,
                           store: Store = Depends(get_store),
                           current_user: dict = Depends(verify_token)):
    """Update a draft quotation"""
    return await service.update_quotation(store, quotation_id, quotation)


@router.patch('/{quotation_id}/status', response_model=Quotation)
async def update_quotation_status(quotation_id: int, status_update: StatusUpdate,
                                  store: Store = Depends(get_store),
                                  current_user: dict = Depends(verify_token)):
    """Move a quotation along draft -> sent -> accepted/rejected"""
    return await service.update_status(store, quotation_id, status_update.status)


@router.post('/{quotation_id}/duplicate', response_model=Quotation)
async def duplicate_quotation(quotation_id: int, store: Store = Depends(get_store),
                              current_user: dict = Depends(verify_token)):
    """Duplicate a quotation as a new draft"""
    return await service.duplicate_quotation(store, quotation_id)


@router.post('/{quotation_id}/convert', response_model=Bill)
async def convert_quotation(quotation_id: int, store: Store = Depends(get_store),
                            current_user: dict = Depends(verify_token)):
    """Turn an accepted quotation into a pending bill"""
    return await service.convert_to_bill(store, quotation_id)


@router.delete('/{quotation_id}')
async def delete_quotation(quotation_id: int, store: Store = Depends(get_store),
                           current_user: dict = Depends(verify_token)):
    """Delete a quotation"""
    return await service.delete_quotation(store, quotation_id)
