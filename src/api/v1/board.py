from fastapi import APIRouter, Depends

from src.api.dependencies.board import get_board
from src.services.board_service import BoardService
from src.schemas.board import BoardResponse
from src.schemas.column import ColumnList
from src.logs import api_logger

router = APIRouter(tags=["board"])


def build_board_response(board: BoardService) -> BoardResponse:
    return BoardResponse.model_validate(board.get_view(), from_attributes=True)


@router.get("/board", response_model=BoardResponse)
async def get_board_view(board: BoardService = Depends(get_board)):
    """Columns with their tasks in display order and the task being dragged"""
    return build_board_response(board)


@router.get("/columns", response_model=ColumnList)
async def get_columns(board: BoardService = Depends(get_board)):
    """Fixed board columns"""
    columns = board.store.columns
    api_logger.info(f"Returning {len(columns)} columns")
    return ColumnList.model_validate({"columns": columns}, from_attributes=True)
