from datetime import timezone

from sqlalchemy import Column, Integer, String, DateTime, Text

from ..database import Base


class VisitEvent(Base):
    """
    Un registro por visita/beacon de fin de sesión.
    Los campos numéricos (tiempo, coordenadas, páginas vistas) se guardan como texto.
    """
    __tablename__ = "visit_events"

    # Nombre en el JSON -> atributo de la columna
    FIELDS = {
        "scriptId": "script_id",
        "userId": "user_id",
        "ipAddress": "ip_address",
        "timestamp": "timestamp",
        "userAgent": "user_agent",
        "timeSpent": "time_spent",
        "city": "city",
        "latitude": "latitude",
        "longitude": "longitude",
        "pageViews": "page_views",
    }

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(String(64), unique=True, index=True, nullable=False)
    # Fecha de creación asignada por el servidor (orden y filtros de rango)
    created_at = Column(DateTime, index=True, nullable=False)

    script_id = Column(String(64), index=True, nullable=False)
    user_id = Column(String(255), nullable=False)
    ip_address = Column(String(255), nullable=False)
    # Timestamp ISO-8601 enviado por el cliente (se usa para agrupar por día)
    timestamp = Column(String(64), nullable=False)
    user_agent = Column(Text, nullable=False)
    time_spent = Column(String(32), nullable=False, default="0")
    city = Column(String(255), nullable=False, default="Unknown")
    latitude = Column(String(32), nullable=False, default="0")
    longitude = Column(String(32), nullable=False, default="0")
    page_views = Column(String(32), nullable=False, default="1")

    def to_document(self) -> dict:
        document = {
            "$id": self.document_id,
            "$createdAt": self.created_at.replace(tzinfo=timezone.utc).isoformat(),
        }
        for key, attr in self.FIELDS.items():
            document[key] = getattr(self, attr)
        return document
