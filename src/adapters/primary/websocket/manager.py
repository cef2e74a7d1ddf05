"""
WebSocket Connection Manager para las pantallas de items.

Gestiona las conexiones WebSocket abiertas por las pantallas de lista y
detalle, que reciben cada snapshot nuevo del inventario en tiempo real.
"""

import logging
from typing import Dict
from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Gestor de conexiones WebSocket.

    Mantiene un diccionario simple: {connection_id: websocket}
    """

    def __init__(self):
        # Conexiones activas: {connection_id: WebSocket}
        self.connections: Dict[str, WebSocket] = {}

    async def connect(self, websocket: WebSocket, connection_id: str):
        """
        Acepta la conexión y la registra.

        Args:
            websocket: Instancia de WebSocket
            connection_id: Identificador de la conexión (ej: items-1a2b3c4d)
        """
        await websocket.accept()
        self.connections[connection_id] = websocket
        logger.info("Pantalla %s conectada al WebSocket", connection_id)

    def disconnect(self, connection_id: str):
        if connection_id in self.connections:
            del self.connections[connection_id]
            logger.info("Pantalla %s desconectada del WebSocket", connection_id)

    async def send_message(self, connection_id: str, message: dict) -> bool:
        """
        Envía un mensaje JSON a una conexión.

        Returns:
            False si la conexión no existe o el envío falló (se desconecta)
        """
        websocket = self.connections.get(connection_id)
        if websocket is None:
            return False
        try:
            await websocket.send_json(message)
            return True
        except Exception as e:
            logger.warning("Error enviando mensaje a %s: %s", connection_id, e)
            # Si falla, desconectar
            self.disconnect(connection_id)
            return False

    def is_connected(self, connection_id: str) -> bool:
        return connection_id in self.connections


# Instancia global del manager
manager = ConnectionManager()
