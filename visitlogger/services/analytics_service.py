"""
Agregaciones sobre los eventos de visita: listado paginado y serie diaria.
"""
import logging
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from ..utils import parse_client_date
from .document_store import DocumentList, DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_GRAPH_DAYS = 5


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def window_dates(days: int, today: date) -> List[date]:
    """Fechas de la ventana [today - (days - 1), today], la más antigua primero."""
    return [today - timedelta(days=i) for i in range(days - 1, -1, -1)]


def window_start(days: int, today: date) -> datetime:
    """Inicio (00:00) del primer día de la ventana."""
    first_day = today - timedelta(days=days - 1)
    return datetime(first_day.year, first_day.month, first_day.day)


def build_daily_series(timestamps: Iterable[Optional[str]], days: int, today: date) -> List[dict]:
    """
    Cuenta eventos por día según el timestamp del cliente y completa con cero
    los días sin eventos. Siempre retorna exactamente `days` entradas.
    """
    counts = Counter()
    skipped = 0
    for value in timestamps:
        day = parse_client_date(value)
        if day is None:
            skipped += 1
            continue
        counts[day] += 1

    if skipped:
        logger.warning(f"Se ignoraron {skipped} eventos con timestamp inválido")

    return [
        {"date": day.strftime("%Y-%m-%d"), "count": counts.get(day, 0)}
        for day in window_dates(days, today)
    ]


def list_visits(
    store: DocumentStore,
    collection: str,
    script_id: str,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> DocumentList:
    """Página de eventos de un script, del más reciente al más antiguo."""
    return store.list_documents(
        collection,
        equal={"scriptId": script_id},
        descending=True,
        offset=page_offset(page, limit),
        limit=limit,
    )


def visits_graph(
    store: DocumentStore,
    collection: str,
    script_id: str,
    days: int = DEFAULT_GRAPH_DAYS,
    now: Optional[datetime] = None,
) -> List[dict]:
    """Serie diaria de visitas de los últimos `days` días (UTC), incluido hoy."""
    today = (now or datetime.utcnow()).date()
    result = store.list_documents(
        collection,
        equal={"scriptId": script_id},
        created_after=window_start(days, today),
        descending=True,
    )
    return build_daily_series((doc.get("timestamp") for doc in result.documents), days, today)
