import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from billflow import __version__
from billflow.config import configure_logging, settings as env
from billflow.errors import BillingError
from billflow.settings.service import default_settings
from billflow.store import Store, build_store

logger = logging.getLogger(__name__)

MODULES = [
    "auth", "clients", "services", "bills",
    "payments", "quotations", "settings", "reports"
]


# ============================================================
# ERROR HANDLING
# ============================================================

async def billing_error_handler(request: Request, exc: BillingError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# ============================================================
# FASTAPI APP
# ============================================================

def create_app(store: Optional[Store] = None) -> FastAPI:
    """
    Build the API. Without an explicit store, one is built from
    BILLFLOW_STORE / DATABASE_URL.
    """
    configure_logging()

    app = FastAPI(
        title='billflow API',
        description='Billing administration: clients, services, bills, quotations and payments',
        version=__version__
    )

    if store is None:
        store = build_store(env.store_backend, default_settings(), env.database_url)
    app.state.store = store
    logger.info(f"billflow started with {type(store.bills).__name__}")

    # CORS CONFIGURATION (supports all preview deployments)
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=env.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"]
    )

    app.add_exception_handler(BillingError, billing_error_handler)

    # ROUTERS
    from billflow.auth.router import router as auth_router
    from billflow.clients.router import router as clients_router
    from billflow.services.router import router as services_router
    from billflow.bills.router import router as bills_router
    from billflow.payments.router import router as payments_router
    from billflow.quotations.router import router as quotations_router
    from billflow.settings.router import router as settings_router
    from billflow.reports.router import router as reports_router

    app.include_router(auth_router)
    app.include_router(clients_router)
    app.include_router(services_router)
    app.include_router(bills_router)
    app.include_router(payments_router)
    app.include_router(quotations_router)
    app.include_router(settings_router)
    app.include_router(reports_router)

    # ROOT & HEALTH ENDPOINTS

    @app.get("/")
    def read_root():
        return {
            "message": "billflow API is running!",
            "version": __version__,
            "store": type(store.bills).__name__,
        }

    @app.get("/health")
    def health_check():
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "modules": MODULES
        }

    return app
