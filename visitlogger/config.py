import os


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Configuración de la aplicación que lee variables de entorno dinámicamente."""

    @property
    def app_name(self) -> str:
        return "Visit Logger Backend"

    @property
    def environment(self) -> str:
        env = os.getenv("ENV", "").lower()
        if env == "production" or os.getenv("VERCEL_ENV", "").lower() == "production":
            return "production"
        return "development"

    @property
    def port(self) -> int:
        return int(os.getenv("PORT", "3000"))

    @property
    def database_url(self) -> str:
        # Sin DATABASE_URL se usa SQLite local
        url = os.getenv("DATABASE_URL", "").strip()
        return url or "sqlite:///./visitlogger.db"

    @property
    def public_base_url(self) -> str:
        """URL pública del backend, usada en el snippet y en scriptUrl."""
        return os.getenv("PUBLIC_BASE_URL", "http://localhost:3000").rstrip("/")

    @property
    def events_collection(self) -> str:
        return os.getenv("EVENTS_COLLECTION_ID", "events")

    @property
    def scripts_collection(self) -> str:
        return os.getenv("SCRIPTS_COLLECTION_ID", "scripts")

    @property
    def request_timeout_seconds(self) -> float:
        return float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))

    @property
    def rate_limit_window_seconds(self) -> int:
        return int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900"))  # 15 minutos

    @property
    def rate_limit_max_requests(self) -> int:
        return int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "100"))

    @property
    def rate_limit_tracking_max_requests(self) -> int:
        # Techo más bajo para /track y /track.js
        return int(os.getenv("RATE_LIMIT_TRACKING_MAX_REQUESTS", "50"))

    @property
    def trust_proxy_headers(self) -> bool:
        """Leer la IP de X-Forwarded-For / X-Real-IP (solo detrás de un proxy propio)."""
        return _env_bool("TRUST_PROXY_HEADERS", False)

    @property
    def analytics_empty_not_found(self) -> bool:
        """Si es True, un listado sin documentos responde 404 en lugar de 200."""
        return _env_bool("ANALYTICS_EMPTY_NOT_FOUND", False)


# Instancia singleton de Settings (sin cache, lee valores dinámicamente)
_settings_instance = None


def get_settings() -> Settings:
    """Retorna la instancia de Settings. Lee variables de entorno dinámicamente."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def clear_settings_cache():
    """Limpia la instancia de settings."""
    global _settings_instance
    _settings_instance = None
