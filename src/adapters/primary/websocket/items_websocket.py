"""
WebSocket endpoints para las pantallas de lista y detalle de items.

Cada conexión se suscribe a una consulta en vivo y recibe un snapshot al
conectar y otro cada vez que cambia el inventario.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional
from uuid import uuid4

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from .manager import manager
from src.application.live_query import LiveQuery
from src.core.domain.item_api_models import ItemView
from src.core.domain.models import Item

logger = logging.getLogger(__name__)

router = APIRouter()


def _serialize_items(items: list[Item]) -> list[dict]:
    return [ItemView.from_item(item).model_dump() for item in items]


def _serialize_item(item: Optional[Item]) -> Optional[dict]:
    return ItemView.from_item(item).model_dump() if item is not None else None


@router.websocket("/ws/items")
async def items_websocket_endpoint(websocket: WebSocket):
    """
    Pantalla de lista: snapshots de todos los items ordenados por nombre.

    Mensaje enviado:
    {
        "action": "items",
        "data": [{"id": 1, "name": "Apple", "price": 0.5, ...}, ...]
    }
    """
    service = websocket.app.state.inventory_service
    await stream_live_query(websocket, "items", service.all_items, _serialize_items)


@router.websocket("/ws/items/{item_id}")
async def item_websocket_endpoint(websocket: WebSocket, item_id: int):
    """
    Pantalla de detalle: snapshots de un item ("data": null si no existe).
    """
    service = websocket.app.state.inventory_service
    await stream_live_query(websocket, "item", service.retrieve_item(item_id), _serialize_item)


async def stream_live_query(
    websocket: WebSocket,
    action: str,
    live_query: LiveQuery,
    serialize: Callable[[Any], Any],
):
    """
    Reenvía al cliente cada snapshot de ``live_query`` hasta que se desconecte.

    El cliente puede enviar {"action": "refresh"} para pedir el snapshot actual.
    """
    connection_id = f"{action}-{uuid4().hex[:8]}"
    await manager.connect(websocket, connection_id)
    subscription = live_query.subscribe()

    async def forward():
        async for snapshot in subscription:
            sent = await manager.send_message(connection_id, {
                "action": action,
                "data": serialize(snapshot),
            })
            if not sent:
                return

    async def listen():
        try:
            while True:
                try:
                    data = await websocket.receive_json()
                except ValueError:
                    await send_error(websocket, "INVALID_MESSAGE", "El mensaje no es JSON válido")
                    continue
                if not isinstance(data, dict):
                    await send_error(websocket, "INVALID_MESSAGE", "Se esperaba un objeto JSON")
                    continue
                if data.get("action") == "refresh":
                    snapshot = await live_query.fetch()
                    await manager.send_message(connection_id, {
                        "action": action,
                        "data": serialize(snapshot),
                    })
                else:
                    await send_error(
                        websocket,
                        "UNKNOWN_ACTION",
                        f"Acción desconocida: {data.get('action')}"
                    )
        except WebSocketDisconnect:
            return

    tasks = [asyncio.create_task(forward()), asyncio.create_task(listen())]
    try:
        await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in tasks:
            task.cancel()
        subscription.close()
        manager.disconnect(connection_id)


async def send_error(websocket: WebSocket, error_code: str, message: str):
    """
    Envía un mensaje de error al cliente.

    Args:
        websocket: Conexión WebSocket
        error_code: Código del error
        message: Mensaje descriptivo del error
    """
    try:
        await websocket.send_json({
            "action": "error",
            "data": {
                "error_code": error_code,
                "message": message,
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        })
    except Exception as e:
        logger.warning("Error enviando mensaje de error: %s", e)
