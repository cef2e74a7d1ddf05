import asyncio
import logging
from concurrent.futures import Executor
from typing import Callable, List, Optional, TypeVar
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from src.core.domain.models import Item
from src.core.ports.repository import ItemRepositoryPort
from src.adapters.secondary.database.orm import ItemModel

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SQLAlchemyItemRepository(ItemRepositoryPort):
    """
    Repositorio de items sobre SQLAlchemy.

    Cada operación abre su propia sesión y se ejecuta en el executor de fondo,
    nunca en el hilo del event loop. Con un executor de un solo hilo las
    operaciones se ejecutan en orden FIFO.
    """

    def __init__(self, session_factory: sessionmaker, executor: Executor):
        self.session_factory = session_factory
        self.executor = executor

    async def _run(self, work: Callable[[Session], T]) -> T:
        def task() -> T:
            db = self.session_factory()
            try:
                return work(db)
            finally:
                db.close()

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, task)

    async def insert(self, item: Item) -> Optional[int]:
        def work(db: Session) -> Optional[int]:
            if item.id and db.get(ItemModel, item.id) is not None:
                logger.debug("Insert ignorado: ya existe item id=%s", item.id)
                return None

            db_item = ItemModel(
                name=item.name,
                price=item.price,
                quantity_in_stock=item.quantity_in_stock,
            )
            if item.id:
                db_item.id = item.id
            db.add(db_item)
            try:
                db.commit()
            except IntegrityError:
                # Otro insert ganó la carrera por el mismo id
                db.rollback()
                logger.debug("Insert ignorado por conflicto de id=%s", item.id)
                return None
            return db_item.id

        return await self._run(work)

    async def update(self, item: Item) -> bool:
        def work(db: Session) -> bool:
            db_item = db.get(ItemModel, item.id)
            if db_item is None:
                logger.debug("Update ignorado: no existe item id=%s", item.id)
                return False
            db_item.name = item.name
            db_item.price = item.price
            db_item.quantity_in_stock = item.quantity_in_stock
            db.commit()
            return True

        return await self._run(work)

    async def delete(self, item: Item) -> bool:
        def work(db: Session) -> bool:
            deleted = db.query(ItemModel).filter(ItemModel.id == item.id).delete()
            db.commit()
            if not deleted:
                logger.debug("Delete ignorado: no existe item id=%s", item.id)
            return deleted > 0

        return await self._run(work)

    async def get_by_id(self, item_id: int) -> Optional[Item]:
        def work(db: Session) -> Optional[Item]:
            db_item = db.get(ItemModel, item_id)
            if db_item:
                return Item.model_validate(db_item)
            return None

        return await self._run(work)

    async def list_all(self) -> List[Item]:
        def work(db: Session) -> List[Item]:
            items = db.query(ItemModel).order_by(ItemModel.name.asc()).all()
            return [Item.model_validate(item) for item in items]

        return await self._run(work)
