import asyncio
import logging
from typing import List, Optional, Set
from src.core.domain.models import Item
from src.core.ports.repository import ItemRepositoryPort
from src.application.live_query import LiveQuery

logger = logging.getLogger(__name__)


class ItemStore:
    """
    Almacén de items con lecturas en vivo.

    Las escrituras que cambian la tabla hacen que todas las consultas en vivo
    con suscriptores se reevalúen y publiquen un snapshot nuevo. Los no-ops
    (insert con id repetido, update/delete de un id inexistente) no publican.
    """

    def __init__(self, repository: ItemRepositoryPort):
        self.repository = repository
        self._active: Set[LiveQuery] = set()

    async def insert(self, item: Item) -> Optional[int]:
        new_id = await self.repository.insert(item)
        if new_id is not None:
            logger.info("Item %s insertado con id=%s", item.name, new_id)
            await self._invalidate()
        return new_id

    async def update(self, item: Item) -> bool:
        updated = await self.repository.update(item)
        if updated:
            logger.info("Item id=%s actualizado", item.id)
            await self._invalidate()
        return updated

    async def delete(self, item: Item) -> bool:
        deleted = await self.repository.delete(item)
        if deleted:
            logger.info("Item id=%s eliminado", item.id)
            await self._invalidate()
        return deleted

    def get_item(self, item_id: int) -> LiveQuery[Optional[Item]]:
        return LiveQuery(
            f"item:{item_id}",
            lambda: self.repository.get_by_id(item_id),
            self._active.add,
            self._active.discard,
        )

    def get_items(self) -> LiveQuery[List[Item]]:
        return LiveQuery(
            "items",
            self.repository.list_all,
            self._active.add,
            self._active.discard,
        )

    async def _invalidate(self) -> None:
        queries = list(self._active)
        if queries:
            await asyncio.gather(*(query.refresh() for query in queries))
