"""
Modelos Pydantic para la API de items.

Las pantallas envían los campos del formulario tal cual (texto); la
conversión a número la hace el servicio.
"""

from pydantic import BaseModel, Field

from src.core.domain.models import Item


class ItemEntryRequest(BaseModel):
    """
    Formulario de alta/edición de un item.

    item_id = 0 (o ausente) crea un item nuevo; > 0 edita el existente.
    """
    item_id: int = Field(0, description="0 = nuevo item, > 0 = editar existente")
    name: str = Field("", description="Nombre del item")
    price: str = Field("", description="Precio unitario, texto del formulario")
    quantity: str = Field("", description="Cantidad en stock, texto del formulario")


class ItemEntryAccepted(BaseModel):
    """Respuesta de una operación aceptada (se ejecuta en segundo plano)."""
    status: str = "accepted"
    action: str
    item_id: int = 0


class ItemView(BaseModel):
    """Item listo para mostrar: precio formateado y disponibilidad de stock."""
    id: int
    name: str
    price: float
    quantity_in_stock: int
    formatted_price: str
    in_stock: bool

    @classmethod
    def from_item(cls, item: Item) -> "ItemView":
        return cls(
            id=item.id,
            name=item.name,
            price=item.price,
            quantity_in_stock=item.quantity_in_stock,
            formatted_price=format_price(item.price),
            in_stock=item.quantity_in_stock > 0,
        )


def format_price(price: float) -> str:
    """
    Formatea un precio para mostrar.

    Solo se usa al presentar; el precio almacenado nunca se redondea.

    Ejemplo:
        >>> format_price(1234.5)
        '$1,234.50'
        >>> format_price(9.999)
        '$10.00'
    """
    sign = "-" if price < 0 else ""
    return f"{sign}${abs(price):,.2f}"
