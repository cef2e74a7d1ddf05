"""
Fixtures/Factories para crear datos de items del inventario.

Estas funciones permiten crear datos de prueba o desarrollo de manera
consistente y reutilizable.

Uso:
    from fixtures.item_fixtures import create_sample_items

    items = create_sample_items(session)
"""

from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session

from src.adapters.secondary.database.orm import ItemModel


# ============================================================================
# FACTORIES DE ITEMS
# ============================================================================

def create_item(
    session: Session,
    name: str,
    price: float,
    quantity_in_stock: int,
    commit: bool = False
) -> ItemModel:
    """
    Factory para crear un item.

    Args:
        session: Sesión de SQLAlchemy
        name: Nombre del item
        price: Precio unitario (sin redondear)
        quantity_in_stock: Unidades en stock
        commit: Si True, hace commit inmediatamente

    Returns:
        ItemModel creado
    """
    item = ItemModel(name=name, price=price, quantity_in_stock=quantity_in_stock)
    session.add(item)

    if commit:
        session.commit()
        session.refresh(item)
    else:
        session.flush()

    return item


# ============================================================================
# DATOS DE EJEMPLO
# ============================================================================

def get_sample_items_data() -> List[dict]:
    """Datos de ejemplo: algunos con stock, uno agotado."""
    return [
        {"name": "Apple", "price": 0.5, "quantity_in_stock": 120},
        {"name": "Banana", "price": 0.25, "quantity_in_stock": 80},
        {"name": "Coffee Beans 1kg", "price": 18.99, "quantity_in_stock": 12},
        {"name": "Olive Oil 500ml", "price": 7.45, "quantity_in_stock": 0},
        {"name": "Widget", "price": 9.99, "quantity_in_stock": 5},
    ]


def create_sample_items(session: Session, force: bool = False) -> List[ItemModel]:
    """
    Crea los items de ejemplo.

    Args:
        session: Sesión de SQLAlchemy
        force: Si True, elimina los items existentes antes de crear

    Returns:
        Lista de items creados (vacía si ya había datos y no se forzó)
    """
    existing = session.query(ItemModel).count()
    if existing > 0 and not force:
        return []

    if force:
        clear_all_items(session)

    items = [create_item(session, **data) for data in get_sample_items_data()]
    session.commit()
    return items


def clear_all_items(session: Session) -> int:
    """Elimina todos los items. Retorna cuántos se eliminaron."""
    count = session.query(ItemModel).delete()
    session.commit()
    return count


def get_item_stats(session: Session) -> dict:
    """Estadísticas básicas del inventario."""
    total = session.query(ItemModel).count()
    out_of_stock = session.query(ItemModel).filter(ItemModel.quantity_in_stock <= 0).count()
    total_units = session.query(func.coalesce(func.sum(ItemModel.quantity_in_stock), 0)).scalar()
    stock_value = session.query(
        func.coalesce(func.sum(ItemModel.price * ItemModel.quantity_in_stock), 0.0)
    ).scalar()

    return {
        "total_items": total,
        "in_stock_items": total - out_of_stock,
        "out_of_stock_items": out_of_stock,
        "total_units": total_units,
        "stock_value": stock_value,
    }
