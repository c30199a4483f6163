import logging

from fastapi import APIRouter, Depends, Query

from ..config import Settings
from ..deps import get_app_settings, get_store
from ..errors import NotFound
from ..schemas.visit_event_schema import AnalyticsPage, GraphResponse
from ..services import analytics_service
from ..services.document_store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/graph/{scriptId}", response_model=GraphResponse)
def get_visits_graph(
    scriptId: str,
    days: int = Query(
        analytics_service.DEFAULT_GRAPH_DAYS,
        ge=1,
        le=365,
        description="Cantidad de días (incluido hoy) a mostrar",
    ),
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """
    Serie diaria de visitas de un script.
    Siempre devuelve `days` puntos, con 0 en los días sin visitas.
    """
    graph_data = analytics_service.visits_graph(store, settings.events_collection, scriptId, days)
    return GraphResponse(graphData=graph_data)


@router.get("/{scriptId}", response_model=AnalyticsPage)
def get_visits(
    scriptId: str,
    page: int = Query(analytics_service.DEFAULT_PAGE, ge=1, description="Número de página (desde 1)"),
    limit: int = Query(analytics_service.DEFAULT_LIMIT, ge=1, le=100, description="Documentos por página"),
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Listado paginado de visitas, de la más reciente a la más antigua."""
    result = analytics_service.list_visits(store, settings.events_collection, scriptId, page, limit)

    if result.total == 0 and settings.analytics_empty_not_found:
        raise NotFound()

    return AnalyticsPage(documents=result.documents, total=result.total, page=page, limit=limit)
