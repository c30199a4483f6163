from .rate_limit import RateLimiter, RateLimitMiddleware, get_client_ip
from .request_logging import RequestLoggingMiddleware
from .security_headers import SecurityHeadersMiddleware
from .server_errors import UnhandledErrorMiddleware
from .timeout import TimeoutMiddleware

__all__ = [
    "RateLimiter",
    "RateLimitMiddleware",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
    "UnhandledErrorMiddleware",
    "get_client_ip",
]
