"""
Ingesta de visitas y snippet de seguimiento.
"""
import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from ..config import Settings
from ..deps import get_app_settings, get_store
from ..errors import MissingFields
from ..schemas.visit_event_schema import TrackRequest, TrackResponse
from ..services import snippet_service
from ..services.document_store import DocumentStore
from ..services.tracking_service import record_visit

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tracking"])

JAVASCRIPT = "application/javascript"


async def _read_payload(request: Request) -> TrackRequest:
    # navigator.sendBeacon envía el JSON como text/plain, así que no se mira el Content-Type
    body = await request.body()
    try:
        return TrackRequest.model_validate(json.loads(body or b"{}"))
    except (ValueError, ValidationError):
        logger.info("Beacon con cuerpo inválido")
        raise MissingFields()


@router.post("/track", response_model=TrackResponse)
async def track_visit(
    request: Request,
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """
    Registra un evento de visita enviado por el snippet.
    Cada llamada crea un documento nuevo (sin deduplicación).
    """
    payload = await _read_payload(request)
    await run_in_threadpool(record_visit, store, settings.events_collection, payload)
    return TrackResponse(message="Tracking data saved successfully")


@router.get("/track.js")
def tracker_script(
    scriptId: Optional[str] = None,
    userId: Optional[str] = None,
    settings: Settings = Depends(get_app_settings),
):
    """Sirve el snippet con scriptId y userId embebidos."""
    if not scriptId or not userId:
        return Response(content=snippet_service.MISSING_PARAMS_COMMENT, status_code=400, media_type=JAVASCRIPT)

    source = snippet_service.render_tracker(settings.public_base_url, scriptId, userId)
    return Response(content=source, media_type=JAVASCRIPT)
