from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from src.adapters.primary.api.router import router as item_router
from src.adapters.primary.websocket.items_websocket import router as ws_router
from src.adapters.secondary.database.item_database import ItemDatabase
from src.application.services import InventoryService, InventoryServiceFactory

from contextlib import asynccontextmanager
from src.core.logging_config import setup_logging

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # Una sola BD por proceso; el servicio vive lo que vive la app
    database = ItemDatabase.get_database()
    factory = InventoryServiceFactory(database.item_store())
    app.state.inventory_service = factory.create(InventoryService)
    yield
    app.state.inventory_service.close()

app = FastAPI(title="Inventory", lifespan=lifespan)

# Configuración de CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],  # URLs del frontend
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(item_router, prefix="/api/v1")
app.include_router(ws_router)

@app.get("/health")
def health_check():
    return {"status": "ok"}
