from typing import Optional

from fastapi import APIRouter, Depends

from src.api.dependencies.board import get_board
from src.api.v1.board import build_board_response
from src.models.drag import HoverTarget
from src.services.board_service import BoardService
from src.services.websocket_service import notify_board_updated
from src.schemas.board import BoardResponse
from src.schemas.drag import DragTarget, DragStartEvent, DragOverEvent, DragEndEvent

router = APIRouter(
    prefix="/drag",
    tags=["drag"],
)


def to_hover_target(target: Optional[DragTarget]) -> Optional[HoverTarget]:
    return target.to_hover_target() if target else None


@router.post("/start", response_model=BoardResponse)
async def drag_start(event: DragStartEvent, board: BoardService = Depends(get_board)):
    """Pointer collaborator picked up a sortable entity"""
    if board.drag_start(event.active_id, event.active_kind):
        await notify_board_updated(board)
    return build_board_response(board)


@router.post("/over", response_model=BoardResponse)
async def drag_over(event: DragOverEvent, board: BoardService = Depends(get_board)):
    """Pointer moved over another task or an empty part of a column"""
    if board.drag_over(event.active_id, event.active_kind, to_hover_target(event.over)):
        await notify_board_updated(board)
    return build_board_response(board)


@router.post("/end", response_model=BoardResponse)
async def drag_end(event: DragEndEvent, board: BoardService = Depends(get_board)):
    """Drop or cancel; always leaves the board with no active drag"""
    board.drag_end(event.active_id, to_hover_target(event.over))
    # Сессия сброшена в любом случае, клиентам нужно убрать оверлей
    await notify_board_updated(board)
    return build_board_response(board)
