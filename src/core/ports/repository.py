from abc import ABC, abstractmethod
from typing import List, Optional
from src.core.domain.models import Item

class ItemRepositoryPort(ABC):
    @abstractmethod
    async def insert(self, item: Item) -> Optional[int]:
        """Returns the new id, or None when an item with that id already exists."""
        pass

    @abstractmethod
    async def update(self, item: Item) -> bool:
        pass

    @abstractmethod
    async def delete(self, item: Item) -> bool:
        pass

    @abstractmethod
    async def get_by_id(self, item_id: int) -> Optional[Item]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Item]:
        """All items ordered by name ascending."""
        pass
