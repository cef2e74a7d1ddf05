from src.adapters.secondary.database.item_database import ItemDatabase
from src.adapters.secondary.database.orm import ItemModel

def check_db():
    database = ItemDatabase.get_database()
    db = database.session_factory()
    try:
        items = db.query(ItemModel).order_by(ItemModel.name.asc()).all()
        print(f"Found {len(items)} items in the database.")
        for item in items[:5]: # Show first 5
            print(f"ID: {item.id}, Name: {item.name}, Price: {item.price}, Quantity: {item.quantity_in_stock}")
    finally:
        db.close()
        ItemDatabase.close_database()

if __name__ == "__main__":
    check_db()
