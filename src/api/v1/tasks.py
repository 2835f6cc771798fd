from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.api.dependencies.board import get_board
from src.services.board_service import BoardService
from src.services.websocket_service import notify_board_updated
from src.schemas.task import TaskResponse, TaskUpdate, TaskList
from src.logs import debug_logger

router = APIRouter(tags=["tasks"])


@router.get("/tasks", response_model=TaskList)
async def get_tasks(board: BoardService = Depends(get_board)):
    """All tasks in global-sequence order"""
    return TaskList.model_validate({"tasks": board.store.tasks}, from_attributes=True)


@router.post(
    "/columns/{column_id}/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(column_id: str, board: BoardService = Depends(get_board)):
    """Append a new task with default content to the end of a column"""
    task = board.create_task(column_id)
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Column not found"
        )

    await notify_board_updated(board)
    return TaskResponse.model_validate(task, from_attributes=True)


@router.put("/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    task_update: TaskUpdate,
    board: BoardService = Depends(get_board),
):
    """Replace the content of a task"""
    task = board.update_task(task_id, task_update.content)
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )

    await notify_board_updated(board)
    return TaskResponse.model_validate(task, from_attributes=True)


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, board: BoardService = Depends(get_board)):
    """Remove a task from the board"""
    if not board.delete_task(task_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )

    debug_logger.info(f"Задача {task_id} удалена через API")
    await notify_board_updated(board)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
