"""
Consultas "en vivo" sobre el store.

Un LiveQuery reevalúa su consulta y publica el resultado a todos sus
suscriptores cada vez que el store avisa de un cambio. Cada suscriptor
recibe el snapshot actual al suscribirse y después uno nuevo por cambio,
hasta que cierra su suscripción.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Generic, List, Optional, Set, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CLOSED = object()


class Subscription(Generic[T]):
    """
    Suscripción a un LiveQuery. Se consume como iterador asíncrono:

        async with live_query.subscribe() as subscription:
            async for snapshot in subscription:
                ...
    """

    def __init__(self, live_query: "LiveQuery[T]"):
        self._live_query = live_query
        self._queue: asyncio.Queue = asyncio.Queue()
        self._last_sequence = 0
        self.closed = False

    def _push(self, sequence: int, snapshot: T) -> None:
        # Un snapshot calculado antes que el último entregado llega tarde: se descarta
        if self.closed or sequence <= self._last_sequence:
            return
        self._last_sequence = sequence
        self._queue.put_nowait(snapshot)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._live_query._remove(self)
        self._queue.put_nowait(_CLOSED)

    async def next(self, timeout: Optional[float] = None) -> T:
        """Espera el siguiente snapshot (StopAsyncIteration si está cerrada)."""
        return await asyncio.wait_for(self.__anext__(), timeout)

    def __aiter__(self) -> "Subscription[T]":
        return self

    async def __anext__(self) -> T:
        if self.closed and self._queue.empty():
            raise StopAsyncIteration
        snapshot = await self._queue.get()
        if snapshot is _CLOSED:
            raise StopAsyncIteration
        return snapshot

    async def __aenter__(self) -> "Subscription[T]":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()


class LiveQuery(Generic[T]):
    def __init__(
        self,
        name: str,
        compute: Callable[[], Awaitable[T]],
        on_active: Optional[Callable[["LiveQuery"], None]] = None,
        on_inactive: Optional[Callable[["LiveQuery"], None]] = None,
    ):
        self.name = name
        self._compute = compute
        self._on_active = on_active
        self._on_inactive = on_inactive
        self._subscribers: List[Subscription[T]] = []
        self._tasks: Set[asyncio.Task] = set()
        self._sequence = 0

    def __repr__(self) -> str:
        return f"LiveQuery({self.name!r}, subscribers={len(self._subscribers)})"

    @property
    def has_subscribers(self) -> bool:
        return bool(self._subscribers)

    def subscribe(self) -> Subscription[T]:
        """Nueva suscripción; el snapshot actual se entrega en segundo plano."""
        subscription = Subscription(self)
        first = not self._subscribers
        self._subscribers.append(subscription)
        if first and self._on_active:
            self._on_active(self)
        self._spawn(self._publish([subscription]))
        return subscription

    def observe(self, callback: Callable[[T], None]) -> Subscription[T]:
        """Llama a ``callback`` con cada snapshot hasta cerrar la suscripción."""
        subscription = self.subscribe()

        async def pump():
            async for snapshot in subscription:
                callback(snapshot)

        self._spawn(pump())
        return subscription

    async def fetch(self) -> T:
        """Evalúa la consulta una vez, sin suscribirse."""
        return await self._compute()

    async def refresh(self) -> None:
        """Reevalúa la consulta y publica a todos los suscriptores activos."""
        await self._publish(list(self._subscribers))

    async def _publish(self, targets: List[Subscription[T]]) -> None:
        if not targets:
            return
        self._sequence += 1
        sequence = self._sequence
        try:
            snapshot = await self._compute()
        except Exception:
            logger.exception("Error evaluando la consulta %s", self.name)
            return
        for subscription in targets:
            subscription._push(sequence, snapshot)

    def _spawn(self, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _remove(self, subscription: Subscription[T]) -> None:
        if subscription in self._subscribers:
            self._subscribers.remove(subscription)
            if not self._subscribers and self._on_inactive:
                self._on_inactive(self)
