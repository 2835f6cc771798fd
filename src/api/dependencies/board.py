from fastapi import Request

from src.services.board_service import BoardService


def get_board(request: Request) -> BoardService:
    """The single board owned by the application, created in the lifespan hook"""
    return request.app.state.board
