from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError
import json

from src.api.v1.drag import to_hover_target
from src.services.board_service import BoardService
from src.services.websocket_service import manager, board_snapshot, notify_board_updated
from src.logs.server_log import api_logger
from src.schemas.drag import DragStartEvent, DragOverEvent, DragEndEvent
from src.schemas.websocket import (
    WebSocketEventType,
    WebSocketCommandType,
    WebSocketMessage,
    WebSocketCommand,
    WebSocketErrorMessage,
    TaskCreateCommand,
    TaskUpdateCommand,
    TaskDeleteCommand,
)

router = APIRouter(tags=["websockets"])


def error_message(message: str, code: int = 400) -> WebSocketMessage:
    return WebSocketMessage(
        event=WebSocketEventType.ERROR,
        data=WebSocketErrorMessage(message=message, code=code).model_dump(),
    )


def handle_command(board: BoardService, command: WebSocketCommand) -> bool:
    """Apply one client command to the board.

    Returns True when the board changed and subscribers need a fresh view.
    Raises ValueError for unknown commands and ValidationError for bad data.
    """
    data = command.data

    if command.command == WebSocketCommandType.DRAG_START:
        event = DragStartEvent.model_validate(data)
        return board.drag_start(event.active_id, event.active_kind)

    if command.command == WebSocketCommandType.DRAG_OVER:
        event = DragOverEvent.model_validate(data)
        return board.drag_over(event.active_id, event.active_kind, to_hover_target(event.over))

    if command.command == WebSocketCommandType.DRAG_END:
        event = DragEndEvent.model_validate(data)
        board.drag_end(event.active_id, to_hover_target(event.over))
        # Оверлей надо убрать даже если порядок не изменился
        return True

    if command.command == WebSocketCommandType.CREATE_TASK:
        payload = TaskCreateCommand.model_validate(data)
        if board.create_task(payload.column_id) is None:
            raise ValueError(f"Column not found: {payload.column_id}")
        return True

    if command.command == WebSocketCommandType.UPDATE_TASK:
        payload = TaskUpdateCommand.model_validate(data)
        if board.update_task(payload.task_id, payload.content) is None:
            raise ValueError(f"Task not found: {payload.task_id}")
        return True

    if command.command == WebSocketCommandType.DELETE_TASK:
        payload = TaskDeleteCommand.model_validate(data)
        if not board.delete_task(payload.task_id):
            raise ValueError(f"Task not found: {payload.task_id}")
        return True

    raise ValueError(f"Unknown command: {command.command}")


@router.websocket("/ws/board")
async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for pointer notifications and board updates.

    On connect the client receives a ``board_updated`` event with the current
    view. Commands from client:
    - {"command": "ping", "data": {}}
    - {"command": "drag_start", "data": {"active_id": "1", "active_kind": "Task"}}
    - {"command": "drag_over", "data": {"active_id": "1", "over": {"kind": "Task", "id": "3"}}}
    - {"command": "drag_end", "data": {"active_id": "1", "over": null}}
    - {"command": "create_task", "data": {"column_id": "todo"}}
    - {"command": "update_task", "data": {"task_id": "1", "content": "..."}}
    - {"command": "delete_task", "data": {"task_id": "1"}}
    """
    board: BoardService = websocket.app.state.board

    await manager.connect(websocket)
    await manager.send(
        websocket,
        WebSocketMessage(event=WebSocketEventType.BOARD_UPDATED, data=board_snapshot(board)),
    )

    try:
        while True:
            raw = await websocket.receive_text()

            try:
                command = WebSocketCommand.model_validate(json.loads(raw))
            except (json.JSONDecodeError, ValidationError):
                await manager.send(websocket, error_message("Invalid message format"))
                api_logger.warning("WebSocket: Received malformed message")
                continue

            if command.command == WebSocketCommandType.PING:
                await manager.send(websocket, WebSocketMessage(event=WebSocketEventType.PONG, data={}))
                continue

            try:
                changed = handle_command(board, command)
            except ValidationError as e:
                await manager.send(websocket, error_message(f"Invalid data for {command.command}: {e.error_count()} errors"))
                continue
            except ValueError as e:
                await manager.send(websocket, error_message(str(e)))
                api_logger.warning(f"WebSocket: {str(e)}")
                continue

            if changed:
                await notify_board_updated(board)

    except WebSocketDisconnect:
        manager.disconnect(websocket)

    except Exception as e:
        api_logger.error(f"WebSocket: Error in connection: {str(e)}")
        try:
            await manager.send(websocket, error_message(f"Error: {str(e)}", code=500))
            await websocket.close(code=1011)
        except Exception:
            # Клиент, скорее всего, уже отключился
            api_logger.info("WebSocket: client disconnected during error handling")
        finally:
            manager.disconnect(websocket)
