import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ..errors import VisitLoggerError, error_response

logger = logging.getLogger(__name__)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Convierte cualquier excepción no manejada en un 500 JSON genérico.
    Va dentro de CORSMiddleware para que la respuesta lleve Access-Control-Allow-Origin.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(f"💥 Error no manejado en {request.method} {request.url.path}: {e}", exc_info=True)
            return error_response(VisitLoggerError())
