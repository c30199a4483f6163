"""
Almacén de documentos sobre SQLAlchemy.

Expone solo lo que usa la app: crear un documento en una colección y listar
documentos filtrando por igualdad y fecha de creación, ordenados por
`$createdAt` y paginados con offset/limit. Cada colección se asocia a un
modelo ORM; los nombres de colección vienen de la configuración.
"""
import logging
import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from ..config import Settings
from ..database import Base, build_engine, build_session_factory
from ..errors import StorageUnavailable
from ..models import TrackingScript, VisitEvent

logger = logging.getLogger(__name__)


class DocumentList(NamedTuple):
    total: int
    documents: List[dict]


def unique_id() -> str:
    """Genera un identificador único de documento."""
    return uuid.uuid4().hex


class DocumentStore:
    def __init__(
        self,
        engine,
        collections: Dict[str, type],
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.engine = engine
        self.collections = collections
        self._session_factory = build_session_factory(engine)
        self._clock = clock or datetime.utcnow

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentStore":
        engine = build_engine(settings.database_url)
        collections = {
            settings.events_collection: VisitEvent,
            settings.scripts_collection: TrackingScript,
        }
        return cls(engine, collections)

    def create_collections(self):
        """Crea las tablas de todas las colecciones si no existen."""
        tables = [model.__table__ for model in self.collections.values()]
        try:
            Base.metadata.create_all(bind=self.engine, tables=tables)
        except SQLAlchemyError as e:
            raise StorageUnavailable() from e
        logger.info(f"✅ Colecciones verificadas: {', '.join(self.collections)}")

    @contextmanager
    def session(self):
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def _model(self, collection: str):
        try:
            return self.collections[collection]
        except KeyError:
            raise StorageUnavailable(f"Unknown collection: {collection}") from None

    def create_document(self, collection: str, data: dict, document_id: Optional[str] = None) -> dict:
        """
        Inserta un documento nuevo. `data` usa los nombres del JSON (camelCase).
        Retorna el documento guardado, con `$id` y `$createdAt`.
        """
        model = self._model(collection)
        values = {attr: data.get(key) for key, attr in model.FIELDS.items() if key in data}
        record = model(
            document_id=document_id or unique_id(),
            created_at=self._clock(),
            **values,
        )
        with self.session() as db:
            try:
                db.add(record)
                db.commit()
                db.refresh(record)
            except SQLAlchemyError as e:
                db.rollback()
                raise StorageUnavailable() from e
            return record.to_document()

    def list_documents(
        self,
        collection: str,
        equal: Optional[Dict[str, str]] = None,
        created_after: Optional[datetime] = None,
        descending: bool = True,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> DocumentList:
        """
        Lista documentos de una colección.

        - equal: filtros de igualdad por campo del JSON
        - created_after: límite inferior (inclusive) sobre `$createdAt`
        - total: cantidad de documentos que cumplen los filtros, sin paginar
        """
        model = self._model(collection)
        with self.session() as db:
            try:
                query = db.query(model)
                for key, value in (equal or {}).items():
                    query = query.filter(getattr(model, model.FIELDS[key]) == value)
                if created_after is not None:
                    query = query.filter(model.created_at >= created_after)

                total = query.with_entities(func.count(model.id)).scalar() or 0

                if descending:
                    query = query.order_by(model.created_at.desc(), model.id.desc())
                else:
                    query = query.order_by(model.created_at.asc(), model.id.asc())
                if offset:
                    query = query.offset(offset)
                if limit is not None:
                    query = query.limit(limit)

                documents = [record.to_document() for record in query.all()]
            except SQLAlchemyError as e:
                raise StorageUnavailable() from e
        return DocumentList(total=total, documents=documents)
