from fastapi import WebSocket
from typing import Set

from src.schemas.board import BoardResponse
from src.schemas.websocket import WebSocketEventType, WebSocketMessage
from src.services.board_service import BoardService
from src.logs.server_log import api_logger


def board_snapshot(board: BoardService) -> dict:
    """JSON-ready read model of the board"""
    return BoardResponse.model_validate(board.get_view(), from_attributes=True).model_dump(mode="json")


class ConnectionManager:
    """WebSocket connection manager for board updates"""

    def __init__(self):
        self.active_connections: Set[WebSocket] = set()

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.add(websocket)

        client_host = websocket.client.host if websocket.client else "unknown"
        api_logger.info(f"WebSocket: client connected from {client_host}, total {len(self.active_connections)}")

    def disconnect(self, websocket: WebSocket):
        self.active_connections.discard(websocket)

        client_host = websocket.client.host if websocket.client else "unknown"
        api_logger.info(f"WebSocket: client disconnected from {client_host}, total {len(self.active_connections)}")

    async def send(self, websocket: WebSocket, message: WebSocketMessage):
        await websocket.send_text(message.model_dump_json())

    async def broadcast(self, message: WebSocketMessage):
        """Send a message to every connected client, dropping dead connections"""
        if not self.active_connections:
            return

        json_message = message.model_dump_json()
        api_logger.info(
            f"WebSocket: Broadcasting event '{message.event.value}' to {len(self.active_connections)} clients"
        )

        disconnected = set()
        for websocket in list(self.active_connections):
            try:
                await websocket.send_text(json_message)
            except Exception as e:
                api_logger.error(f"WebSocket: Failed to send message: {str(e)}")
                disconnected.add(websocket)

        self.active_connections -= disconnected


manager = ConnectionManager()


async def notify_board_updated(board: BoardService):
    """Push the current board view to all subscribers"""
    message = WebSocketMessage(event=WebSocketEventType.BOARD_UPDATED, data=board_snapshot(board))
    await manager.broadcast(message)
