"""
Motor de almacenamiento de LibroInventario.

Incluye la clase base para los modelos ORM y `InventoryDbHelper`, que posee el
motor SQLAlchemy de la base de datos SQLite, crea la tabla de libros la primera
vez que se abre y mantiene el número de versión del esquema.
Los errores al abrir la base de datos se propagan al llamador; no hay reintentos.
"""

import logging
import threading
from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from libroinventario.core.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()

DATABASE_NAME = "inventory.db"
DATABASE_VERSION = 1


def _engine_for(database_url: str) -> Engine:
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_pre_ping=True)
    # Loaders query from worker threads, so the connection may cross threads.
    connect_args = {"check_same_thread": False}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(database_url, connect_args=connect_args)


class InventoryDbHelper:
    """
    Abre (o crea) la base de datos del inventario.

    Atributos:
        database_url (str): Cadena de conexión SQLAlchemy.
        version (int): Versión de esquema que espera la aplicación.
    """

    def __init__(self, database_url: str, version: int = DATABASE_VERSION):
        self.database_url = database_url
        self.version = version
        self._engine: Optional[Engine] = None
        self._lock = threading.Lock()

    def open_or_create(self) -> Engine:
        """
        Devuelve el motor, creando la tabla de libros si todavía no existe.

        La operación es idempotente: la segunda llamada devuelve el mismo motor,
        también cuando varios hilos la invocan a la vez sobre un fichero nuevo.

        Returns:
            Engine: Motor SQLAlchemy listo para usarse.

        Raises:
            sqlalchemy.exc.SQLAlchemyError: Si la base de datos no se puede abrir.
        """
        if self._engine is not None:
            return self._engine

        # Register the Book table on Base.metadata.
        from libroinventario.models import book  # noqa: F401

        with self._lock:
            if self._engine is not None:
                return self._engine
            engine = _engine_for(self.database_url)
            try:
                with engine.begin() as connection:
                    Base.metadata.create_all(bind=connection)
                    self._sync_version(connection)
            except Exception:
                engine.dispose()
                raise

            logger.info(f"Database opened at {self.database_url} (schema version {self.version}).")
            self._engine = engine
            return engine

    def _sync_version(self, connection: Connection) -> None:
        if connection.dialect.name != "sqlite":
            return
        current = connection.exec_driver_sql("PRAGMA user_version").scalar() or 0
        if current == self.version:
            return
        if current == 0:
            logger.info(f"Created table books in new database, stamping version {self.version}.")
        elif current < self.version:
            self.upgrade(current, self.version)
        else:
            logger.warning(f"Database version {current} is newer than expected {self.version}.")
            return
        connection.exec_driver_sql(f"PRAGMA user_version = {int(self.version)}")

    def upgrade(self, old_version: int, new_version: int) -> None:
        """Hook de migración. No hay migraciones definidas todavía."""
        logger.info(f"Upgrade from version {old_version} to {new_version}: nothing to migrate.")

    def stored_version(self) -> int:
        """Versión de esquema guardada en el fichero SQLite (0 si no es SQLite)."""
        engine = self.open_or_create()
        with engine.connect() as connection:
            if connection.dialect.name != "sqlite":
                return 0
            return connection.exec_driver_sql("PRAGMA user_version").scalar() or 0

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def close(self) -> None:
        """Libera el pool de conexiones. Se puede volver a abrir después."""
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None


@lru_cache(maxsize=1)
def get_db_helper() -> InventoryDbHelper:
    """
    Proporciona el helper de la base de datos configurada en `settings`.

    Returns:
        InventoryDbHelper: Instancia compartida por toda la aplicación.
    """
    return InventoryDbHelper(settings.DATABASE_URL)
