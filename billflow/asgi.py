"""ASGI entry point: ``uvicorn billflow.asgi:app``."""

from billflow.main import create_app

app = create_app()
