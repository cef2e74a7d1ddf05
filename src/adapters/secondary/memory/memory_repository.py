import logging
from typing import Dict, List, Optional
from src.core.domain.models import Item
from src.core.ports.repository import ItemRepositoryPort

logger = logging.getLogger(__name__)


class InMemoryItemRepository(ItemRepositoryPort):
    """Repositorio en memoria (dict por id). Útil para tests y demos sin BD."""

    def __init__(self, items: Optional[List[Item]] = None):
        self._items: Dict[int, Item] = {}
        self._last_id = 0
        for item in items or []:
            self._store_new(item)

    def _store_new(self, item: Item) -> int:
        if item.id:
            item_id = item.id
        else:
            item_id = self._last_id + 1
        self._last_id = max(self._last_id, item_id)
        self._items[item_id] = item.model_copy(update={"id": item_id})
        return item_id

    async def insert(self, item: Item) -> Optional[int]:
        if item.id and item.id in self._items:
            logger.debug("Insert ignorado: ya existe item id=%s", item.id)
            return None
        return self._store_new(item)

    async def update(self, item: Item) -> bool:
        if item.id not in self._items:
            logger.debug("Update ignorado: no existe item id=%s", item.id)
            return False
        self._items[item.id] = item
        return True

    async def delete(self, item: Item) -> bool:
        if self._items.pop(item.id, None) is None:
            logger.debug("Delete ignorado: no existe item id=%s", item.id)
            return False
        return True

    async def get_by_id(self, item_id: int) -> Optional[Item]:
        return self._items.get(item_id)

    async def list_all(self) -> List[Item]:
        return sorted(self._items.values(), key=lambda item: item.name)
