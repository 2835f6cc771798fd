from typing import Any, Dict, List, Optional

from src.models.column import DEFAULT_COLUMNS
from src.models.drag import DragKind, HoverTarget
from src.models.task import DEFAULT_TASKS, Task
from src.services.drag_session import DragSession
from src.services.reorder_service import ReorderService
from src.services.task_service import TaskStore
from src.logs import debug_logger


class BoardService:
    """Board controller: routes UI and pointer notifications, builds the read model.

    The only writer of the board state. All handlers are synchronous, so when
    they are called from the event loop each notification is applied whole,
    in arrival order.
    """

    def __init__(self, store: Optional[TaskStore] = None):
        self.store = store if store is not None else TaskStore()
        self.session = DragSession()
        self.reorder = ReorderService(self.store, self.session)

    @classmethod
    def create_default(cls, seed_tasks: bool = True) -> "BoardService":
        """Board with the fixed columns and, optionally, the demo tasks"""
        store = TaskStore(DEFAULT_COLUMNS, DEFAULT_TASKS if seed_tasks else None)
        debug_logger.info(f"Доска создана: {len(store)} задач, колонки {[c.id for c in store.columns]}")
        return cls(store)

    # -------------------- task editing --------------------
    def create_task(self, column_id: str) -> Optional[Task]:
        if self.store.get_column(column_id) is None:
            debug_logger.warning(f"Колонка {column_id} не найдена при создании задачи")
            return None
        return self.store.create_task(column_id)

    def update_task(self, task_id: str, content: str) -> Optional[Task]:
        return self.store.update_task(task_id, content)

    def delete_task(self, task_id: str) -> bool:
        return self.store.delete_task(task_id)

    # -------------------- pointer notifications --------------------
    def drag_start(self, active_id: str, active_kind: DragKind) -> bool:
        return self.reorder.drag_start(active_id, active_kind)

    def drag_over(self, active_id: str, active_kind: DragKind, over: Optional[HoverTarget]) -> bool:
        return self.reorder.drag_over(active_id, active_kind, over)

    def drag_end(self, active_id: str, over: Optional[HoverTarget]) -> bool:
        return self.reorder.drag_end(active_id, over)

    # -------------------- read model --------------------
    @property
    def active_task(self) -> Optional[Task]:
        """Task shown in the drag overlay, None when idle"""
        if not self.session.is_dragging:
            return None
        return self.store.get(self.session.active_task_id)

    def get_columns_view(self) -> List[Dict[str, Any]]:
        view = []
        for column in self.store.columns:
            tasks = self.store.tasks_in_column(column.id)
            view.append({
                "id": column.id,
                "title": column.title,
                "draggable": column.draggable,
                "task_count": len(tasks),
                "tasks": tasks,
            })
        return view

    def get_view(self) -> Dict[str, Any]:
        """Columns with their tasks in global-sequence order, plus the active task"""
        return {
            "columns": self.get_columns_view(),
            "active_task": self.active_task,
        }
