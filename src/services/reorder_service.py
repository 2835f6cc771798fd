from typing import Optional

from src.models.drag import DragKind, HoverTarget
from src.services.drag_session import DragSession
from src.services.task_service import TaskStore
from src.logs import debug_logger, log_function


class ReorderService:
    """Turns drag start/over/end notifications into Task Store mutations.

    Holds no state of its own: the active task lives in the DragSession and the
    ordering lives in the TaskStore's global sequence. Every handler returns
    True when it acted on the notification.
    """

    def __init__(self, store: TaskStore, session: DragSession):
        self.store = store
        self.session = session

    @log_function()
    def drag_start(self, active_id: str, active_kind: DragKind) -> bool:
        if active_kind != DragKind.TASK:
            # Колонки не перетаскиваются
            debug_logger.debug(f"Перетаскивание колонки {active_id} отключено")
            return False

        if self.store.get(active_id) is None:
            debug_logger.warning(f"Задача {active_id} не найдена при начале перетаскивания")
            return False

        self.session.start(active_id)
        return True

    def drag_over(
        self,
        active_id: str,
        active_kind: DragKind,
        over: Optional[HoverTarget],
    ) -> bool:
        """Follow the pointer while a task is dragged.

        Fires on every pointer move, so it must be cheap and leave the store
        untouched when there is nothing to do.
        """
        if over is None or over.id == active_id:
            return False
        if active_kind != DragKind.TASK:
            return False

        active_index = self.store.index_of(active_id)
        if active_index == -1:
            debug_logger.warning(f"Перетаскиваемая задача {active_id} не найдена")
            return False
        active_task = self.store.task_at(active_index)

        if over.is_task:
            over_index = self.store.index_of(over.id)
            if over_index == -1:
                return False
            over_task = self.store.task_at(over_index)

            if active_task.column_id != over_task.column_id:
                # Смена колонки: встаем перед задачей под курсором
                self.store.set_task_column(active_id, over_task.column_id)
                self.store.move_task(active_index, over_index - 1)
                return True

            self.store.move_task(active_index, over_index)
            return True

        if over.is_column:
            if self.store.get_column(over.id) is None:
                debug_logger.warning(f"Колонка {over.id} не найдена")
                return False
            if active_task.column_id == over.id:
                return False

            self.store.set_task_column(active_id, over.id)
            # Позиция в общей последовательности не меняется
            self.store.move_task(active_index, active_index)
            return True

        return False

    @log_function()
    def drag_end(self, active_id: str, over: Optional[HoverTarget]) -> bool:
        """Commit the final position of the dragged task.

        The session is cleared whatever the drop target is. Column changes were
        already applied while hovering, so only the position is committed here.
        """
        self.session.clear()

        if over is None or over.id == active_id:
            return False

        active_index = self.store.index_of(active_id)
        if active_index == -1:
            debug_logger.warning(f"Задача {active_id} не найдена при завершении перетаскивания")
            return False

        if over.is_task:
            over_index = self.store.index_of(over.id)
            if over_index == -1:
                debug_logger.warning(f"Целевая задача {over.id} не найдена")
                return False
        elif self.store.get_column(over.id) is None:
            debug_logger.warning(f"Колонка {over.id} не найдена")
            return False
        else:
            # У колонки нет позиции в последовательности: отсутствующий индекс
            # означает последнее место
            over_index = -1

        self.store.move_task(active_index, over_index)
        debug_logger.info(f"Задача {active_id} перемещена на позицию {over_index}")
        return True
