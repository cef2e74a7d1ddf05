from fastapi import APIRouter, Depends, HTTPException, Request
from src.core.domain.item_api_models import ItemEntryAccepted, ItemEntryRequest, ItemView
from src.application.services import InventoryService

router = APIRouter(tags=["items"])

# Dependency Injection Helper
def get_service(request: Request) -> InventoryService:
    return request.app.state.inventory_service

def _save_entry(service: InventoryService, entry: ItemEntryRequest) -> ItemEntryAccepted:
    # Con algún campo en blanco la acción no se ejecuta
    if not service.is_entry_valid(entry.name, entry.price, entry.quantity):
        raise HTTPException(status_code=400, detail="Name, price and quantity are required")

    if entry.item_id > 0:
        service.update_item(entry.item_id, entry.name, entry.price, entry.quantity)
        return ItemEntryAccepted(action="update", item_id=entry.item_id)

    service.add_new_item(entry.name, entry.price, entry.quantity)
    return ItemEntryAccepted(action="insert")

@router.get("/items/", response_model=list[ItemView])
async def list_items(service: InventoryService = Depends(get_service)):
    items = await service.all_items.fetch()
    return [ItemView.from_item(item) for item in items]

@router.get("/items/{item_id}", response_model=ItemView)
async def read_item(item_id: int, service: InventoryService = Depends(get_service)):
    item = await service.retrieve_item(item_id).fetch()
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return ItemView.from_item(item)

@router.post("/items/", response_model=ItemEntryAccepted, status_code=202)
async def save_item(entry: ItemEntryRequest, service: InventoryService = Depends(get_service)):
    return _save_entry(service, entry)

@router.put("/items/{item_id}", response_model=ItemEntryAccepted, status_code=202)
async def update_item(item_id: int, entry: ItemEntryRequest, service: InventoryService = Depends(get_service)):
    if item_id <= 0:
        raise HTTPException(status_code=404, detail="Item not found")
    return _save_entry(service, entry.model_copy(update={"item_id": item_id}))

@router.post("/items/{item_id}/sell", response_model=ItemEntryAccepted, status_code=202)
async def sell_item(item_id: int, service: InventoryService = Depends(get_service)):
    item = await service.retrieve_item(item_id).fetch()
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    if not service.is_stock_available(item):
        raise HTTPException(status_code=409, detail="Item out of stock")
    service.sell_item(item)
    return ItemEntryAccepted(action="sell", item_id=item_id)

@router.delete("/items/{item_id}", response_model=ItemEntryAccepted, status_code=202)
async def delete_item(item_id: int, service: InventoryService = Depends(get_service)):
    item = await service.retrieve_item(item_id).fetch()
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    service.delete_item(item)
    return ItemEntryAccepted(action="delete", item_id=item_id)
