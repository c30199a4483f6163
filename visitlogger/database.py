# Configuración de base de datos usando SQLAlchemy.
#
# - DESARROLLO LOCAL: SQLite local (visitlogger.db) si DATABASE_URL no está configurada
# - PRODUCCIÓN: la base indicada en DATABASE_URL (PostgreSQL u otra)
#
# El engine no se crea al importar: lo construye DocumentStore al iniciar la app,
# así los tests pueden usar una base en memoria.

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(database_url: str):
    """Crea el engine de SQLAlchemy para la URL dada."""
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        # Una base en memoria debe compartir la misma conexión entre hilos
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            logger.info("[INFO] Usando SQLite en memoria")
            return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
        logger.info("[INFO] Usando SQLite local")
        return create_engine(database_url, connect_args=connect_args)

    logger.info("[INFO] Usando base de datos externa (DATABASE_URL)")
    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
