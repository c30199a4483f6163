"""
Dependencias compartidas de FastAPI.
El almacén y la configuración se crean una sola vez en create_app() y se
guardan en app.state; los routers los reciben con Depends().
"""
from fastapi import Request

from .config import Settings
from .services.document_store import DocumentStore


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
