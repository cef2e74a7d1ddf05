"""
Tests del contrato de repositorio de items.

Cada test corre contra el adaptador SQLAlchemy (SQLite en memoria) y contra
el adaptador en memoria.

Ejecutar tests:
    pytest tests/test_item_repository.py -v
"""

import asyncio

from src.core.domain.models import Item


# ============================================================================
# INSERT
# ============================================================================

class TestItemInsert:
    """Tests para insert."""

    def test_insert_assigns_fresh_id(self, repository):
        """Test: id = 0 significa 'nuevo', el repositorio asigna uno."""
        async def scenario():
            new_id = await repository.insert(Item(name="Widget", price=9.99, quantity_in_stock=5))
            return new_id, await repository.list_all()

        new_id, items = asyncio.run(scenario())

        assert new_id is not None and new_id > 0
        assert len(items) == 1
        assert items[0] == Item(id=new_id, name="Widget", price=9.99, quantity_in_stock=5)

    def test_insert_assigns_unique_ids(self, repository):
        """Test: dos inserts nuevos reciben ids distintos."""
        async def scenario():
            first = await repository.insert(Item(name="A", price=1.0, quantity_in_stock=1))
            second = await repository.insert(Item(name="B", price=2.0, quantity_in_stock=2))
            return first, second

        first, second = asyncio.run(scenario())

        assert first != second

    def test_insert_duplicate_id_is_ignored(self, repository):
        """Test: insert con un id existente no sobreescribe (ignore, no upsert)."""
        async def scenario():
            first = await repository.insert(Item(id=42, name="Original", price=1.5, quantity_in_stock=3))
            second = await repository.insert(Item(id=42, name="Impostor", price=99.0, quantity_in_stock=0))
            return first, second, await repository.list_all()

        first, second, items = asyncio.run(scenario())

        assert first == 42
        assert second is None
        assert items == [Item(id=42, name="Original", price=1.5, quantity_in_stock=3)]

    def test_price_keeps_full_precision(self, repository):
        """Test: el precio no se redondea al guardar."""
        async def scenario():
            new_id = await repository.insert(Item(name="Precise", price=0.1 + 0.2, quantity_in_stock=1))
            return await repository.get_by_id(new_id)

        item = asyncio.run(scenario())

        assert item.price == 0.1 + 0.2


# ============================================================================
# UPDATE / DELETE
# ============================================================================

class TestItemUpdateDelete:
    """Tests para update y delete."""

    def test_update_replaces_full_record(self, repository):
        async def scenario():
            item_id = await repository.insert(Item(name="Old", price=1.0, quantity_in_stock=1))
            updated = await repository.update(Item(id=item_id, name="New", price=2.5, quantity_in_stock=7))
            return updated, await repository.get_by_id(item_id)

        updated, item = asyncio.run(scenario())

        assert updated is True
        assert item.name == "New"
        assert item.price == 2.5
        assert item.quantity_in_stock == 7

    def test_update_missing_id_is_noop(self, repository):
        async def scenario():
            updated = await repository.update(Item(id=999, name="Ghost", price=1.0, quantity_in_stock=1))
            return updated, await repository.list_all()

        updated, items = asyncio.run(scenario())

        assert updated is False
        assert items == []

    def test_delete_then_get_returns_none(self, repository):
        async def scenario():
            item_id = await repository.insert(Item(name="Doomed", price=1.0, quantity_in_stock=1))
            item = await repository.get_by_id(item_id)
            deleted = await repository.delete(item)
            return deleted, await repository.get_by_id(item_id)

        deleted, item = asyncio.run(scenario())

        assert deleted is True
        assert item is None

    def test_delete_matches_by_id_only(self, repository):
        """Test: un snapshot desactualizado también borra el registro."""
        async def scenario():
            item_id = await repository.insert(Item(name="Stale", price=1.0, quantity_in_stock=3))
            stale = await repository.get_by_id(item_id)
            await repository.update(stale.model_copy(update={"quantity_in_stock": 2}))
            deleted = await repository.delete(stale)
            return deleted, await repository.get_by_id(item_id)

        deleted, item = asyncio.run(scenario())

        assert deleted is True
        assert item is None

    def test_delete_missing_id_is_noop(self, repository):
        deleted = asyncio.run(
            repository.delete(Item(id=12345, name="Ghost", price=0.0, quantity_in_stock=0))
        )

        assert deleted is False


# ============================================================================
# CONSULTAS
# ============================================================================

class TestItemQueries:
    """Tests para consultas."""

    def test_list_all_ordered_by_name(self, repository):
        async def scenario():
            for name in ["Cherry", "Banana", "Apple"]:
                await repository.insert(Item(name=name, price=1.0, quantity_in_stock=1))
            return await repository.list_all()

        items = asyncio.run(scenario())

        assert [item.name for item in items] == ["Apple", "Banana", "Cherry"]

    def test_list_all_is_case_sensitive(self, repository):
        """Test: orden binario, las mayúsculas van antes que las minúsculas."""
        async def scenario():
            for name in ["apple", "Banana"]:
                await repository.insert(Item(name=name, price=1.0, quantity_in_stock=1))
            return await repository.list_all()

        items = asyncio.run(scenario())

        assert [item.name for item in items] == ["Banana", "apple"]

    def test_get_by_id_missing_returns_none(self, repository):
        assert asyncio.run(repository.get_by_id(777)) is None
