from fastapi import APIRouter, Depends
from typing import List

from billflow.auth.service import verify_token
from billflow.store import Store, get_store
from .models import Service, ServiceCategory, ServiceCreate, ServiceUpdate
from . import service as services

router = APIRouter(prefix='/services', tags=['services'])


@router.post('/', response_model=Service)
async def create_service(data: ServiceCreate, store: Store = Depends(get_store),
                         current_user: dict = Depends(verify_token)):
    """Create a new catalog service"""
    return await services.create_service(store, data)

@router.get('/', response_model=List[Service])
async def get_services(search: str = "", category: str = "all", status: str = "all",
                       store: Store = Depends(get_store),
                       current_user: dict = Depends(verify_token)):
    """Get services; status is active, inactive or all"""
    return await services.get_all_services(store, search, category, status)

@router.get('/active', response_model=List[Service])
async def get_active_services(store: Store = Depends(get_store),
                              current_user: dict = Depends(verify_token)):
    return await services.get_active_services(store)

@router.get('/category/{category}', response_model=List[Service])
async def get_services_by_category(category: ServiceCategory, store: Store = Depends(get_store),
                                   current_user: dict = Depends(verify_token)):
    return await services.get_services_by_category(store, category)

@router.get('/{service_id}', response_model=Service)
async def get_service(service_id: int, store: Store = Depends(get_store),
                      current_user: dict = Depends(verify_token)):
    """Get a single service"""
    return await services.get_service(store, service_id)

@router.put('/{service_id}', response_model=Service)
async def update_service(service_id: int, data: ServiceUpdate, store: Store = Depends(get_store),
                         current_user: dict = Depends(verify_token)):
    """Update an existing service"""
    return await services.update_service(store, service_id, data)

@router.post('/{service_id}/toggle', response_model=Service)
async def toggle_service(service_id: int, store: Store = Depends(get_store),
                         current_user: dict = Depends(verify_token)):
    """Flip a service between active and inactive"""
    return await services.toggle_active(store, service_id)

@router.delete('/{service_id}')
async def delete_service(service_id: int, store: Store = Depends(get_store),
                         current_user: dict = Depends(verify_token)):
    """Delete a service"""
    return await services.delete_service(store, service_id)
