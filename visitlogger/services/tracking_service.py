"""
Ingesta de eventos de visita.
"""
import logging

from ..errors import MissingFields
from ..schemas.visit_event_schema import TrackRequest
from ..utils import as_text
from .document_store import DocumentStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("scriptId", "userId", "ipAddress", "timestamp", "userAgent")

# Campos opcionales y su valor por defecto (siempre texto)
OPTIONAL_DEFAULTS = {
    "timeSpent": "0",
    "city": "Unknown",
    "latitude": "0",
    "longitude": "0",
    "pageViews": "1",
}


def normalize_visit(payload: TrackRequest) -> dict:
    """
    Valida los campos obligatorios y convierte los opcionales a texto.
    Lanza MissingFields si falta alguno obligatorio o está vacío.
    """
    data = payload.model_dump()
    missing = [field for field in REQUIRED_FIELDS if not data.get(field)]
    if missing:
        logger.info(f"Evento rechazado, faltan campos: {', '.join(missing)}")
        raise MissingFields()

    visit = {field: str(data[field]) for field in REQUIRED_FIELDS}
    for field, default in OPTIONAL_DEFAULTS.items():
        visit[field] = as_text(data.get(field), default)
    return visit


def record_visit(store: DocumentStore, collection: str, payload: TrackRequest) -> dict:
    """
    Guarda un evento nuevo. No hay deduplicación: dos beacons idénticos
    generan dos documentos.
    """
    visit = normalize_visit(payload)
    document = store.create_document(collection, visit)
    logger.info(f"Evento guardado: {document['$id']} (script {visit['scriptId'][:8]}...)")
    return document
