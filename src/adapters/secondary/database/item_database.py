"""
Punto de acceso único a la base de datos de items.

Mantiene una sola instancia por proceso (engine, sesiones, executor de fondo
y store). Se crea la primera vez que se pide, bajo un lock, para que aunque
varios hilos la pidan a la vez solo se construya una.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from sqlalchemy import MetaData, inspect

from src.adapters.secondary.database.config import (
    Base,
    SCHEMA_VERSION,
    create_item_engine,
    create_session_factory,
    get_database_url,
)
from src.adapters.secondary.database.orm import SchemaVersion
from src.adapters.secondary.database.item_repository import SQLAlchemyItemRepository
from src.application.store import ItemStore

logger = logging.getLogger(__name__)


def prepare_schema(engine, session_factory, schema_version: int = SCHEMA_VERSION) -> bool:
    """
    Deja el esquema en la versión esperada.

    Si la versión registrada no existe o no coincide, se borran todas las
    tablas y se recrean (se pierden los datos). No hay migraciones.

    Returns:
        True si hubo que reconstruir la BD
    """
    existing_tables = inspect(engine).get_table_names()

    current_version = None
    if SchemaVersion.__tablename__ in existing_tables:
        db = session_factory()
        try:
            row = db.get(SchemaVersion, 1)
            current_version = row.version if row else None
        finally:
            db.close()

    if current_version == schema_version:
        return False

    if existing_tables:
        logger.warning(
            "Versión de esquema %s != %s: se reconstruye la base de datos (se pierden los datos)",
            current_version,
            schema_version,
        )
        # Se reflejan las tablas reales: pueden ser de una versión anterior del modelo
        existing = MetaData()
        existing.reflect(bind=engine)
        existing.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)

    db = session_factory()
    try:
        db.merge(SchemaVersion(id=1, version=schema_version))
        db.commit()
    finally:
        db.close()
    return True


class ItemDatabase:
    _instance: Optional["ItemDatabase"] = None
    _lock = threading.Lock()

    def __init__(self, database_url: str):
        self.database_url = database_url
        self.engine = create_item_engine(database_url)
        self.session_factory = create_session_factory(self.engine)
        prepare_schema(self.engine, self.session_factory)

        # Un solo hilo: las operaciones de BD se ejecutan en orden de llegada
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="item-db")
        self._store = ItemStore(SQLAlchemyItemRepository(self.session_factory, self.executor))
        logger.info("Base de datos de items abierta: %s", self.engine.url)

    def item_store(self) -> ItemStore:
        return self._store

    def close(self) -> None:
        self.executor.shutdown(wait=True)
        self.engine.dispose()

    @classmethod
    def get_database(cls, database_url: Optional[str] = None) -> "ItemDatabase":
        instance = cls._instance
        if instance is not None:
            return instance
        with cls._lock:
            if cls._instance is None:
                cls._instance = cls(database_url or get_database_url())
            return cls._instance

    @classmethod
    def close_database(cls) -> None:
        """Cierra y olvida la instancia (la siguiente llamada crea otra)."""
        with cls._lock:
            if cls._instance is not None:
                cls._instance.close()
                cls._instance = None
