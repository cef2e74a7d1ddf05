from sqlalchemy import Column, Integer, String, Float
from src.adapters.secondary.database.config import Base

class ItemModel(Base):
    __tablename__ = "item"
    # AUTOINCREMENT: los ids de items borrados no se reutilizan
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column("name", String, nullable=False)
    price = Column("price", Float, nullable=False)
    quantity_in_stock = Column("quantity", Integer, nullable=False)

class SchemaVersion(Base):
    __tablename__ = "schema_version"

    # Una sola fila: la versión con la que se creó el esquema
    id = Column(Integer, primary_key=True)
    version = Column(Integer, nullable=False)
