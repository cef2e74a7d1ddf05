from pydantic import BaseModel, ConfigDict


class Item(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    # 0 = sin asignar, el store asigna uno nuevo al insertar
    id: int = 0
    name: str
    price: float
    quantity_in_stock: int
