from typing import Iterable, List, Optional, Sequence, Tuple
import uuid

from src.models.column import Column, DEFAULT_COLUMNS
from src.models.task import Task
from src.logs import debug_logger, log_function


def array_move(items: list, from_index: int, to_index: int) -> None:
    """Relocate one element of ``items`` in place, shifting the ones in between.

    A negative ``to_index`` counts from the end of the list as it was before
    the move, so ``-1`` always means the last slot.
    """
    size = len(items)
    if not 0 <= from_index < size:
        raise IndexError(f"from_index {from_index} out of range for {size} items")
    if not -size <= to_index < size:
        raise IndexError(f"to_index {to_index} out of range for {size} items")

    target = size + to_index if to_index < 0 else to_index
    items.insert(target, items.pop(from_index))


def new_task_id() -> str:
    return uuid.uuid4().hex


class TaskStore:
    """Owns the board columns and the single global sequence of tasks.

    Every task of every column lives in one ordered list; a column's display
    order is that list filtered by ``column_id``.
    """

    def __init__(
        self,
        columns: Sequence[Column] = DEFAULT_COLUMNS,
        tasks: Optional[Iterable[Tuple[str, str, str]]] = None,
    ):
        self._columns: Tuple[Column, ...] = tuple(columns)
        self._tasks: List[Task] = []
        for task_id, column_id, content in tasks or ():
            self._tasks.append(Task(id=task_id, column_id=column_id, content=content))

    # -------------------- reads --------------------
    @property
    def columns(self) -> List[Column]:
        return list(self._columns)

    @property
    def tasks(self) -> List[Task]:
        """Snapshot of the global sequence"""
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def task_at(self, index: int) -> Task:
        """Task at a position of the global sequence, without copying it"""
        return self._tasks[index]

    def get_column(self, column_id: str) -> Optional[Column]:
        return next((col for col in self._columns if col.id == column_id), None)

    def get(self, task_id: str) -> Optional[Task]:
        return next((task for task in self._tasks if task.id == task_id), None)

    def index_of(self, task_id: str) -> int:
        """Position of a task in the global sequence, ``-1`` when absent"""
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return -1

    def tasks_in_column(self, column_id: str) -> List[Task]:
        return [task for task in self._tasks if task.column_id == column_id]

    # -------------------- mutations --------------------
    @log_function()
    def create_task(self, column_id: str) -> Task:
        """Append a new task with default content at the end of the sequence"""
        task = Task(
            id=new_task_id(),
            column_id=column_id,
            content=f"New Task {len(self._tasks) + 1}",
        )
        self._tasks.append(task)
        debug_logger.info(f"Создана новая задача: ID {task.id}, в колонке {column_id}")
        return task

    @log_function()
    def delete_task(self, task_id: str) -> bool:
        index = self.index_of(task_id)
        if index == -1:
            debug_logger.warning(f"Задача с ID {task_id} не найдена при попытке удаления")
            return False

        del self._tasks[index]
        debug_logger.info(f"Задача {task_id} успешно удалена")
        return True

    def update_task(self, task_id: str, content: str) -> Optional[Task]:
        """Replace the content of a task, leaving its column and position alone"""
        task = self.get(task_id)
        if not task:
            debug_logger.warning(f"Задача с ID {task_id} не найдена при попытке обновления")
            return None

        task.content = content
        debug_logger.debug(f"Содержимое задачи {task_id} обновлено")
        return task

    def move_task(self, from_index: int, to_index: int) -> None:
        """Relocate the task at ``from_index`` to ``to_index`` in the global sequence.

        Indices are the caller's responsibility; an out-of-range index raises
        IndexError.
        """
        array_move(self._tasks, from_index, to_index)
        debug_logger.debug(f"Задача перемещена с позиции {from_index} на позицию {to_index}")

    def set_task_column(self, task_id: str, column_id: str) -> Optional[Task]:
        task = self.get(task_id)
        if not task:
            debug_logger.warning(f"Задача с ID {task_id} не найдена при смене колонки")
            return None

        if task.column_id != column_id:
            debug_logger.debug(f"Задача {task_id}: колонка {task.column_id} -> {column_id}")
            task.column_id = column_id
        return task
