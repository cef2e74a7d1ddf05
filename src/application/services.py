import asyncio
import logging
from typing import Awaitable, List, Optional, Set, Type, TypeVar
from src.core.domain.models import Item
from src.application.live_query import LiveQuery
from src.application.store import ItemStore

logger = logging.getLogger(__name__)

S = TypeVar("S", bound="InventoryService")


class InventoryService:
    """
    Intermediario entre la entrada del usuario (texto) y el store.

    Las mutaciones se lanzan como tareas en segundo plano y retornan al
    instante; el resultado solo se observa a través de las consultas en vivo.
    """

    def __init__(self, store: ItemStore):
        self.store = store
        self.all_items: LiveQuery[List[Item]] = store.get_items()
        self._pending: Set[asyncio.Task] = set()

    def is_entry_valid(self, item_name: str, item_price: str, item_count: str) -> bool:
        if not item_name.strip() or not item_price.strip() or not item_count.strip():
            return False
        return True

    def add_new_item(self, item_name: str, item_price: str, item_count: str) -> None:
        # float()/int() lanzan ValueError con texto no numérico; no se captura
        new_item = Item(
            name=item_name,
            price=float(item_price),
            quantity_in_stock=int(item_count),
        )
        self._launch(self.store.insert(new_item), "insert")

    def update_item(self, item_id: int, item_name: str, item_price: str, item_count: str) -> None:
        updated_item = Item(
            id=item_id,
            name=item_name,
            price=float(item_price),
            quantity_in_stock=int(item_count),
        )
        self._launch(self.store.update(updated_item), "update")

    def retrieve_item(self, item_id: int) -> LiveQuery[Optional[Item]]:
        return self.store.get_item(item_id)

    def sell_item(self, item: Item) -> None:
        # Read-modify-write sobre el snapshot del llamador: dos ventas
        # concurrentes sobre el mismo snapshot pueden perder un decremento
        if item.quantity_in_stock > 0:
            sold_item = item.model_copy(update={"quantity_in_stock": item.quantity_in_stock - 1})
            self._launch(self.store.update(sold_item), "update")

    def is_stock_available(self, item: Item) -> bool:
        return item.quantity_in_stock > 0

    def delete_item(self, item: Item) -> None:
        self._launch(self.store.delete(item), "delete")

    async def drain(self) -> None:
        """Espera a que terminen las mutaciones pendientes."""
        while self._pending:
            await asyncio.wait(list(self._pending))

    def close(self) -> None:
        """Cancela las mutaciones que aún no terminaron (best effort)."""
        pending = [task for task in self._pending if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            logger.info("Canceladas %d operaciones pendientes", len(pending))

    def _launch(self, operation: Awaitable, name: str) -> None:
        task = asyncio.get_running_loop().create_task(operation)
        self._pending.add(task)

        def done(finished: asyncio.Task) -> None:
            self._pending.discard(finished)
            if finished.cancelled():
                logger.debug("Operación %s cancelada", name)
            elif finished.exception() is not None:
                logger.error(
                    "Falló la operación %s en segundo plano",
                    name,
                    exc_info=finished.exception(),
                )

        task.add_done_callback(done)


class InventoryServiceFactory:
    def __init__(self, store: ItemStore):
        self.store = store

    def create(self, service_class: Type[S]) -> S:
        if isinstance(service_class, type) and issubclass(service_class, InventoryService):
            return service_class(self.store)
        raise ValueError(f"Unknown service class: {service_class!r}")
