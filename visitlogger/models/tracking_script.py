from datetime import timezone

from sqlalchemy import Column, Integer, String, DateTime, Text

from ..database import Base


class TrackingScript(Base):
    """Script de seguimiento emitido para un sitio. No se modifica después de creado."""
    __tablename__ = "tracking_scripts"

    FIELDS = {
        "scriptId": "script_id",
        "userId": "user_id",
        "scriptName": "script_name",
        "scriptUrl": "script_url",
        "script": "script",
    }

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(String(64), unique=True, index=True, nullable=False)
    created_at = Column(DateTime, index=True, nullable=False)

    script_id = Column(String(64), unique=True, index=True, nullable=False)
    user_id = Column(String(255), index=True, nullable=False)
    # Puede repetirse para el mismo usuario
    script_name = Column(String(255), nullable=False)
    script_url = Column(String(1000), nullable=False)
    # Variante antigua: snippet completo embebido
    script = Column(Text, nullable=True)

    def to_document(self) -> dict:
        document = {
            "$id": self.document_id,
            "$createdAt": self.created_at.replace(tzinfo=timezone.utc).isoformat(),
        }
        for key, attr in self.FIELDS.items():
            document[key] = getattr(self, attr)
        return document
