from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

import os

# En un despliegue real se carga desde variables de entorno
DATABASE_URL = os.getenv('INVENTORY_DATABASE_URL', 'sqlite:///./item_database.db')

# Cualquier cambio de esquema debe subir este número: la BD se reconstruye
# desde cero (se pierden los datos), no hay migraciones
SCHEMA_VERSION = 1

Base = declarative_base()


def get_database_url() -> str:
    """URL actual de la BD (se relee del entorno para poder cambiarla en tests)."""
    return os.getenv('INVENTORY_DATABASE_URL', DATABASE_URL)


def create_item_engine(database_url: str):
    """
    Crea el engine para la URL dada.

    SQLite en memoria usa StaticPool: una sola conexión compartida,
    si no cada conexión vería una BD vacía distinta.
    """
    if not database_url.startswith('sqlite'):
        return create_engine(database_url)

    if database_url in ('sqlite://', 'sqlite:///:memory:'):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(database_url, connect_args={"check_same_thread": False})


def create_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
