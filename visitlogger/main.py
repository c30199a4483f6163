import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from .config import Settings, get_settings, clear_settings_cache
from .errors import register_error_handlers
from .middleware import (
    RateLimiter,
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
    UnhandledErrorMiddleware,
)
from .routers import analytics, scripts, track
from .services.document_store import DocumentStore

# Configurar logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Cargar variables de entorno desde .env (solo en desarrollo local)
backend_dir = Path(__file__).parent.parent
env_path = backend_dir / ".env"
loaded = load_dotenv(dotenv_path=env_path)
if loaded:
    logger.info(f"Variables de entorno cargadas desde: {env_path}")

# Limpiar cache de settings para asegurar que se recarguen las variables
clear_settings_cache()

HOME_PAGE = """
<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Visit Logger</title>
  </head>
  <body>
    <h1>Welcome to the Visit Logger Backend!</h1>
    <p>You have reached the home page of the backend. This is just a simple message.</p>
  </body>
</html>
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    # No bloquear el inicio si la base no está disponible
    try:
        app.state.store.create_collections()
    except Exception as e:
        logger.error(f"❌ Error al crear colecciones al iniciar: {e}", exc_info=True)
        logger.warning("⚠️ El servidor continuará iniciando, pero el almacén puede no estar disponible")
    yield


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
    rate_limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    """
    Construye la app. El almacén se crea una sola vez aquí y se comparte con
    todos los handlers a través de app.state.
    """
    settings = settings or get_settings()
    store = store or DocumentStore.from_settings(settings)
    rate_limiter = rate_limiter or RateLimiter(settings.rate_limit_window_seconds)

    app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    register_error_handlers(app)

    # El último middleware agregado es el más externo
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)
    app.add_middleware(
        RateLimitMiddleware,
        limiter=rate_limiter,
        max_requests=settings.rate_limit_max_requests,
        tracking_max_requests=settings.rate_limit_tracking_max_requests,
        trust_proxy=settings.trust_proxy_headers,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware, trust_proxy=settings.trust_proxy_headers)
    app.add_middleware(UnhandledErrorMiddleware)
    # El snippet corre en sitios de terceros: se permite cualquier origen
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
    )

    app.include_router(track.router)
    app.include_router(scripts.router)
    app.include_router(analytics.router)

    @app.get("/", response_class=HTMLResponse, tags=["root"])
    async def root():
        return HOME_PAGE

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok", "server": "alive"}

    logger.info(f"🔧 {settings.app_name} configurado ({settings.environment})")
    return app


app = create_app()


def run():
    """Levanta el servidor con uvicorn en el puerto configurado (PORT)."""
    import uvicorn

    uvicorn.run("visitlogger.main:app", host="0.0.0.0", port=get_settings().port)


if __name__ == "__main__":
    run()
