"""
Entity Store: one repository per entity type plus the settings singleton.

The application builds a Store once and hands it to request handlers
through the ``get_store`` dependency.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from fastapi import Request

from billflow.bills.models import Bill
from billflow.clients.models import Client
from billflow.payments.models import Payment
from billflow.quotations.models import Quotation
from billflow.services.models import Service
from billflow.settings.models import Settings
from .base import Repository, SettingsRepository
from .memory import MemoryRepository, MemorySettingsRepository

logger = logging.getLogger(__name__)


@dataclass
class Store:
    clients: Repository[Client]
    bills: Repository[Bill]
    payments: Repository[Payment]
    quotations: Repository[Quotation]
    services: Repository[Service]
    settings: SettingsRepository
    # Serializes read-check-write sequences (payments, bill numbering)
    write_lock: asyncio.Lock = field(default_factory=asyncio.Lock)


def memory_store(defaults: Settings, seed: Optional[Dict[str, Iterable[Dict[str, Any]]]] = None) -> Store:
    """In-memory store, optionally seeded with raw records per entity."""
    seed = seed or {}
    return Store(
        clients=MemoryRepository(Client, "Client", seed.get("clients", ())),
        bills=MemoryRepository(Bill, "Bill", seed.get("bills", ())),
        payments=MemoryRepository(Payment, "Payment", seed.get("payments", ())),
        quotations=MemoryRepository(Quotation, "Quotation", seed.get("quotations", ())),
        services=MemoryRepository(Service, "Service", seed.get("services", ())),
        settings=MemorySettingsRepository(defaults),
    )


def sql_store(defaults: Settings, database_url: Optional[str] = None) -> Store:
    """SQLAlchemy-backed store; creates the schema if needed."""
    from billflow.database import init_schema, make_engine, make_session_factory
    from billflow.models import (
        BillRecord, ClientRecord, PaymentRecord, QuotationRecord, ServiceRecord,
    )
    from .sql import SqlRepository, SqlSettingsRepository

    engine = make_engine(database_url)
    init_schema(engine)
    session_factory = make_session_factory(engine)
    logger.info(f"SQL store initialized at {engine.url}")

    return Store(
        clients=SqlRepository(session_factory, ClientRecord, Client, "Client"),
        bills=SqlRepository(session_factory, BillRecord, Bill, "Bill"),
        payments=SqlRepository(session_factory, PaymentRecord, Payment, "Payment"),
        quotations=SqlRepository(session_factory, QuotationRecord, Quotation, "Quotation"),
        services=SqlRepository(session_factory, ServiceRecord, Service, "Service"),
        settings=SqlSettingsRepository(session_factory, defaults),
    )


def build_store(backend: str, defaults: Settings, database_url: Optional[str] = None) -> Store:
    if backend == "sql":
        return sql_store(defaults, database_url)
    if backend == "memory":
        return memory_store(defaults)
    raise ValueError(f"Unknown store backend: {backend}")


def get_store(request: Request) -> Store:
    """FastAPI dependency returning the application's store."""
    return request.app.state.store


__all__ = [
    'Store',
    'Repository',
    'SettingsRepository',
    'memory_store',
    'sql_store',
    'build_store',
    'get_store',
]
