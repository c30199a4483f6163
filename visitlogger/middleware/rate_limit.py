"""
Rate limiting por IP con ventana fija, en memoria del proceso.
Las rutas de ingesta (/track y /track.js) tienen un techo más bajo que el resto.
Las requests que superan el techo se rechazan con 429, no se encolan.
"""
import logging
import threading
import time
from typing import Callable, Dict, Iterable, Tuple

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ..errors import RateLimited, error_response

logger = logging.getLogger(__name__)

TRACKING_PATHS = ("/track", "/track.js")


def get_client_ip(request: Request, trust_proxy: bool = False) -> str:
    """
    Extrae la IP del cliente.
    Las cabeceras de proxy solo se leen con trust_proxy=True (detrás de un proxy propio).
    De X-Forwarded-For se toma el último salto, que es el que agregó ese proxy;
    los anteriores los puede escribir el cliente.
    """
    if trust_proxy:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            hops = [hop.strip() for hop in forwarded_for.split(",") if hop.strip()]
            if hops:
                return hops[-1]

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip.strip()

    if request.client:
        return request.client.host

    return "unknown"


class RateLimiter:
    """Contador por clave con ventana fija de `window_seconds`."""

    def __init__(self, window_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        # clave -> (inicio de la ventana, requests en la ventana)
        self._windows: Dict[str, Tuple[float, int]] = {}

    def hit(self, key: str, max_requests: int) -> Tuple[bool, int]:
        """
        Registra una request para `key`.
        Retorna (permitida, requests restantes en la ventana).
        """
        now = self._clock()
        with self._lock:
            started, count = self._windows.get(key, (now, 0))
            if now - started >= self.window_seconds:
                started, count = now, 0
            if count >= max_requests:
                return False, 0
            count += 1
            self._windows[key] = (started, count)
            if len(self._windows) > 10000:
                self._prune(now)
            return True, max_requests - count

    def _prune(self, now: float):
        expired = [k for k, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for key in expired:
            del self._windows[key]

    def reset(self):
        with self._lock:
            self._windows.clear()


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        limiter: RateLimiter,
        max_requests: int,
        tracking_max_requests: int,
        tracking_paths: Iterable[str] = TRACKING_PATHS,
        trust_proxy: bool = False,
    ):
        super().__init__(app)
        self.limiter = limiter
        self.max_requests = max_requests
        self.tracking_max_requests = tracking_max_requests
        self.tracking_paths = tuple(tracking_paths)
        self.trust_proxy = trust_proxy

    async def dispatch(self, request: Request, call_next):
        # Los preflight de CORS no cuentan
        if request.method == "OPTIONS":
            return await call_next(request)

        client_ip = get_client_ip(request, self.trust_proxy)
        if request.url.path in self.tracking_paths:
            scope, ceiling = "tracking", self.tracking_max_requests
        else:
            scope, ceiling = "global", self.max_requests

        allowed, remaining = self.limiter.hit(f"{scope}:{client_ip}", ceiling)
        if not allowed:
            logger.warning(f"⚠️ Rate limit excedido | {request.method} {request.url.path} | IP: {client_ip}")
            response = error_response(RateLimited())
            response.headers["Retry-After"] = str(self.limiter.window_seconds)
            return response

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(ceiling)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response
