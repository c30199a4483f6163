from datetime import date, datetime, timezone
from typing import Any, Optional


def as_text(value: Any, default: str) -> str:
    """
    Convierte un valor opcional a texto, usando `default` si es falsy.

    Ejemplos:
    - 12.5 -> "12.5"
    - None -> default
    - "" -> default
    - 0 -> default
    """
    if not value:
        return default
    return str(value)


def parse_client_date(value: Optional[str]) -> Optional[date]:
    """
    Obtiene la fecha (UTC) de un timestamp ISO-8601 reportado por el cliente.
    Retorna None si el valor no se puede interpretar.

    Ejemplos:
    - "2024-03-01T23:30:00.000Z" -> 2024-03-01
    - "2024-03-01T22:30:00-03:00" -> 2024-03-02
    - "2024-03-01" -> 2024-03-01
    """
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    # fromisoformat no acepta el sufijo "Z" en versiones anteriores a 3.11
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()
