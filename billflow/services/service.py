import logging
from typing import List, Optional

from billflow.reports.aggregation import filter_entities
from .models import Service, ServiceCategory, ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


def activity_label(service: Service) -> str:
    return "active" if service.is_active else "inactive"


# ============================================================
# CREATE SERVICE
# ============================================================

async def create_service(store, data: ServiceCreate) -> Service:
    service = await store.services.create({**data.model_dump(), "is_active": True})
    logger.info(f"Service {service.id} created ({service.name})")
    return service


# ============================================================
# GET SERVICES
# ============================================================

async def get_all_services(store, search: str = "", category: Optional[str] = "all",
                           status: Optional[str] = "all") -> List[Service]:
    """Search name, description and category; filter by category and activity."""
    services = await store.services.get_all()
    return filter_entities(
        services,
        search,
        fields=("name", "description", "category"),
        filters={"category": category, activity_label: status},
    )


async def get_service(store, service_id: int) -> Service:
    return await store.services.get_by_id(service_id)


async def get_active_services(store) -> List[Service]:
    return await store.services.get_by("is_active", True)


async def get_services_by_category(store, category: ServiceCategory) -> List[Service]:
    """Active services of one category"""
    services = await store.services.get_by("category", category)
    return [s for s in services if s.is_active]


# ============================================================
# UPDATE SERVICE
# ============================================================

async def update_service(store, service_id: int, data: ServiceUpdate) -> Service:
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    service = await store.services.update(service_id, changes)
    logger.info(f"Service {service_id} updated: {sorted(changes)}")
    return service


async def toggle_active(store, service_id: int) -> Service:
    current = await store.services.get_by_id(service_id)
    service = await store.services.update(service_id, {"is_active": not current.is_active})
    logger.info(f"Service {service_id} is now {activity_label(service)}")
    return service


# ============================================================
# DELETE SERVICE
# ============================================================

async def delete_service(store, service_id: int) -> dict:
    await store.services.delete(service_id)
    logger.info(f"Service {service_id} deleted")
    return {"message": "Service deleted successfully"}
