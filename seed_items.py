#!/usr/bin/env python3
"""
Script para cargar datos semilla (seed data) de items del inventario.

Uso:
    python seed_items.py              # Carga datos de ejemplo
    python seed_items.py --force      # Elimina datos existentes y recarga
    python seed_items.py --stats      # Solo muestra estadísticas
"""

import sys
import argparse

from src.adapters.secondary.database.item_database import ItemDatabase
from src.core.domain.item_api_models import format_price

# Importar fixtures
from fixtures.item_fixtures import create_sample_items, get_item_stats


def seed_sample_data(session, force=False):
    """Carga los items de ejemplo."""
    print("\n📦 Cargando items de ejemplo...")

    items = create_sample_items(session, force=force)

    if not items:
        print("⚠️  Ya existen items. Usa --force para recargar.")
        return False

    print(f"✅ {len(items)} items creados exitosamente")
    for item in items:
        print(f"   • {item.name} - {format_price(item.price)} ({item.quantity_in_stock} uds)")

    return True


def show_stats(session):
    """Muestra estadísticas de la base de datos."""
    stats = get_item_stats(session)

    print("\n📊 Estadísticas del inventario:")
    print(f"   • Items: {stats['total_items']}")
    print(f"   • Con stock: {stats['in_stock_items']}")
    print(f"   • Agotados: {stats['out_of_stock_items']}")
    print(f"   • Unidades: {stats['total_units']}")
    print(f"   • Valor del stock: {format_price(stats['stock_value'])}")


def main():
    """Función principal."""
    parser = argparse.ArgumentParser(description="Cargar datos semilla de items")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Eliminar datos existentes y recargar"
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Solo mostrar estadísticas"
    )

    args = parser.parse_args()

    print("=" * 70)
    print("   SEED DE DATOS - Inventario")
    print("=" * 70)

    database = ItemDatabase.get_database()
    session = database.session_factory()

    try:
        if not args.stats:
            seed_sample_data(session, force=args.force)

        show_stats(session)

        print("\n💡 Iniciar servidor: uvicorn src.main:app --reload")
    except KeyboardInterrupt:
        print("\n\n⚠️  Operación cancelada por el usuario")
        sys.exit(1)
    finally:
        session.close()
        ItemDatabase.close_database()


if __name__ == "__main__":
    main()
