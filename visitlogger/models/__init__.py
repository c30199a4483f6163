# Importar todos los modelos para que SQLAlchemy los registre antes de create_all()
from .visit_event import VisitEvent
from .tracking_script import TrackingScript

__all__ = [
    "VisitEvent",
    "TrackingScript",
]
