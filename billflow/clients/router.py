from fastapi import APIRouter, Depends, File, UploadFile
from typing import List

from billflow.auth.service import verify_token
from billflow.errors import ValidationError
from billflow.reports import service as reports
from billflow.reports.models import ClientReport
from billflow.store import Store, get_store
from .models import Client, ClientCreate, ClientImportSummary, ClientUpdate
from . import service

router = APIRouter(prefix='/clients', tags=['clients'])


@router.post('/', response_model=Client)
async def create_client(client: ClientCreate, store: Store = Depends(get_store),
                        current_user: dict = Depends(verify_token)):
    """Create a new client"""
    return await service.create_client(store, client)

@router.get('/', response_model=List[Client])
async def get_clients(search: str = "", store: Store = Depends(get_store),
                      current_user: dict = Depends(verify_token)):
    """Get all clients, optionally searching name and email"""
    return await service.get_all_clients(store, search)

@router.get('/{client_id}', response_model=Client)
async def get_client(client_id: int, store: Store = Depends(get_store),
                     current_user: dict = Depends(verify_token)):
    """Get a single client"""
    return await service.get_client_by_id(store, client_id)

@router.get('/{client_id}/summary', response_model=ClientReport)
async def get_client_summary(client_id: int, store: Store = Depends(get_store),
                             current_user: dict = Depends(verify_token)):
    """Client billing summary, bills and payment history"""
    return await reports.get_client_report(store, client_id)

@router.put('/{client_id}', response_model=Client)
async def update_client(client_id: int, client: ClientUpdate, store: Store = Depends(get_store),
                        current_user: dict = Depends(verify_token)):
    """Update an existing client"""
    return await service.update_client(store, client_id, client)

@router.post('/bulk-import', response_model=ClientImportSummary)
async def import_clients_csv(
    file: UploadFile = File(...),
    skip_duplicates: bool = True,
    store: Store = Depends(get_store),
    current_user: dict = Depends(verify_token)
):
    """Import clients from CSV"""
    if not file.filename.lower().endswith('.csv'):
        raise ValidationError('File must be CSV format')

    content = await file.read()
    return await service.import_clients_from_csv(store, content, file.filename, skip_duplicates)
