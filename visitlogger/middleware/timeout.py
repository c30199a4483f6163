import asyncio
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ..errors import RequestTimeout, error_response

logger = logging.getLogger(__name__)


class TimeoutMiddleware(BaseHTTPMiddleware):
    """
    Corta cualquier request que supere `timeout_seconds` (igual para todas las rutas).
    Si el handler ya estaba escribiendo en el almacén, la escritura puede o no haberse completado.
    """

    def __init__(self, app, timeout_seconds: float):
        super().__init__(app)
        self.timeout_seconds = timeout_seconds

    async def dispatch(self, request: Request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.error(
                f"💥 Timeout ({self.timeout_seconds}s) en {request.method} {request.url.path}"
            )
            return error_response(RequestTimeout())
