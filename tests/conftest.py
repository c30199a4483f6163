from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from visitlogger.config import Settings
from visitlogger.database import build_engine
from visitlogger.errors import StorageUnavailable
from visitlogger.main import create_app
from visitlogger.middleware import RateLimiter
from visitlogger.models import TrackingScript, VisitEvent
from visitlogger.services.document_store import DocumentStore

ENV = {
    "DATABASE_URL": "sqlite://",
    "PUBLIC_BASE_URL": "https://visits.example.com",
    "EVENTS_COLLECTION_ID": "events",
    "SCRIPTS_COLLECTION_ID": "scripts",
    "REQUEST_TIMEOUT_SECONDS": "10",
    "RATE_LIMIT_WINDOW_SECONDS": "900",
    "RATE_LIMIT_MAX_REQUESTS": "1000",
    "RATE_LIMIT_TRACKING_MAX_REQUESTS": "1000",
    "ANALYTICS_EMPTY_NOT_FOUND": "false",
    "TRUST_PROXY_HEADERS": "false",
}


class StepClock:
    """Reloj que avanza un milisegundo por llamada, para que $createdAt sea estrictamente creciente."""

    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return datetime.utcnow() + timedelta(milliseconds=self.calls)


class FailingStore:
    """Almacén que siempre falla."""

    def create_document(self, *args, **kwargs):
        raise StorageUnavailable()

    def list_documents(self, *args, **kwargs):
        raise StorageUnavailable()


@pytest.fixture
def settings(monkeypatch):
    for key, value in ENV.items():
        monkeypatch.setenv(key, value)
    return Settings()


@pytest.fixture
def store():
    store = DocumentStore(
        build_engine("sqlite://"),
        {"events": VisitEvent, "scripts": TrackingScript},
        clock=StepClock(),
    )
    store.create_collections()
    return store


@pytest.fixture
def make_client(settings, store):
    def _make(store_override=None, **kwargs):
        app = create_app(settings=settings, store=store_override or store, **kwargs)
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def beacon():
    return {
        "scriptId": "script-1",
        "userId": "owner-1",
        "ipAddress": "blog.example.com",
        "timestamp": "2024-05-01T10:00:00.000Z",
        "userAgent": "Mozilla/5.0",
        "timeSpent": "12.50",
        "city": "Mendoza",
        "latitude": -32.89,
        "longitude": -68.84,
        "pageViews": 3,
    }
