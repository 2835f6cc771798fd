from typing import Optional

from src.logs import debug_logger


class DragSession:
    """Transient record of the task being dragged.

    Two states: idle (``active_task_id is None``) and dragging a task. The
    session cycles between them for the life of the board.
    """

    def __init__(self):
        self.active_task_id: Optional[str] = None

    @property
    def is_dragging(self) -> bool:
        return self.active_task_id is not None

    def start(self, task_id: str) -> None:
        if self.active_task_id is not None and self.active_task_id != task_id:
            debug_logger.warning(
                f"Начато перетаскивание {task_id}, хотя {self.active_task_id} еще активна"
            )
        self.active_task_id = task_id
        debug_logger.debug(f"Перетаскивание начато: задача {task_id}")

    def clear(self) -> None:
        if self.active_task_id is not None:
            debug_logger.debug(f"Перетаскивание завершено: задача {self.active_task_id}")
        self.active_task_id = None
