from pydantic import BaseModel
from typing import Dict, Any, Optional
from enum import Enum


class WebSocketEventType(str, Enum):
    """Types of WebSocket events sent to clients"""
    BOARD_UPDATED = "board_updated"
    ERROR = "error"
    PONG = "pong"


class WebSocketCommandType(str, Enum):
    """Commands accepted from clients"""
    PING = "ping"
    DRAG_START = "drag_start"
    DRAG_OVER = "drag_over"
    DRAG_END = "drag_end"
    CREATE_TASK = "create_task"
    UPDATE_TASK = "update_task"
    DELETE_TASK = "delete_task"


class WebSocketMessage(BaseModel):
    """Base message for WebSocket communication"""
    event: WebSocketEventType
    data: Dict[str, Any]


class WebSocketCommand(BaseModel):
    """Commands from client to server"""
    command: str
    data: Dict[str, Any] = {}


class WebSocketErrorMessage(BaseModel):
    """Error payload for WebSocket communication"""
    message: str
    code: Optional[int] = None


class TaskCreateCommand(BaseModel):
    """Data of the create_task command"""
    column_id: str


class TaskUpdateCommand(BaseModel):
    """Data of the update_task command"""
    task_id: str
    content: str


class TaskDeleteCommand(BaseModel):
    """Data of the delete_task command"""
    task_id: str
