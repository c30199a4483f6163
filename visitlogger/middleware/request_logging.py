import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .rate_limit import get_client_ip

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Loguea cada request con su status y duración."""

    def __init__(self, app, trust_proxy: bool = False):
        super().__init__(app)
        self.trust_proxy = trust_proxy

    async def dispatch(self, request: Request, call_next):
        client_ip = get_client_ip(request, self.trust_proxy)
        start_time = time.time()

        logger.info(f"→ {request.method} {request.url.path} | IP: {client_ip}")

        response = await call_next(request)
        duration = time.time() - start_time
        status_code = response.status_code

        if 200 <= status_code < 300:
            status_emoji = "✅"
        elif 300 <= status_code < 400:
            status_emoji = "⚠️"
        elif 400 <= status_code < 500:
            status_emoji = "❌"
        else:
            status_emoji = "💥"

        logger.info(
            f"{status_emoji} {request.method} {request.url.path} | "
            f"Status: {status_code} | "
            f"Duration: {duration:.3f}s | "
            f"IP: {client_ip}"
        )
        return response
