"""
Fixtures compartidos para tests - SQLite en memoria con ORM real
"""

import pytest
from concurrent.futures import ThreadPoolExecutor

from fastapi.testclient import TestClient

from tests.database_test_config import (
    TestSessionLocal,
    create_test_database,
    drop_test_database,
    clear_items,
)

from src.adapters.secondary.database.item_database import ItemDatabase
from src.adapters.secondary.database.item_repository import SQLAlchemyItemRepository
from src.adapters.secondary.memory.memory_repository import InMemoryItemRepository
from src.application.services import InventoryService
from src.application.store import ItemStore


# ============================================================================
# DATABASE FIXTURES - SQLite en memoria
# ============================================================================

@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Crea esquema de BD una vez por sesión de tests"""
    create_test_database()
    yield
    drop_test_database()


@pytest.fixture(scope="function")
def test_db():
    """
    Sesión de BD para preparar datos en cada test.
    La tabla item se vacía al terminar: los repositorios abren sus propias
    sesiones, así que no sirve el rollback de una transacción externa.
    """
    session = TestSessionLocal()

    yield session

    session.close()
    clear_items()


@pytest.fixture
def db_executor():
    """Executor de fondo de un solo hilo, como en producción"""
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="item-db-test")
    yield executor
    executor.shutdown(wait=True)


# ============================================================================
# REPOSITORY / STORE FIXTURES
# ============================================================================

@pytest.fixture
def sql_repository(test_db, db_executor):
    return SQLAlchemyItemRepository(TestSessionLocal, db_executor)


@pytest.fixture
def memory_repository():
    return InMemoryItemRepository()


@pytest.fixture(params=["sqlalchemy", "memory"])
def repository(request):
    """Mismo contrato para los dos adaptadores"""
    if request.param == "sqlalchemy":
        return request.getfixturevalue("sql_repository")
    return request.getfixturevalue("memory_repository")


@pytest.fixture
def store(repository):
    return ItemStore(repository)


@pytest.fixture
def service(store):
    return InventoryService(store)


# ============================================================================
# API FIXTURES
# ============================================================================

@pytest.fixture
def client(tmp_path, monkeypatch):
    """
    Cliente de la API con su propia BD SQLite en memoria.
    El singleton se cierra antes y después para no compartir estado.
    """
    monkeypatch.setenv("INVENTORY_DATABASE_URL", "sqlite://")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    ItemDatabase.close_database()

    from src.main import app

    with TestClient(app) as test_client:
        yield test_client

    ItemDatabase.close_database()
