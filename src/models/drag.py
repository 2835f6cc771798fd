from dataclasses import dataclass
from enum import Enum


class DragKind(str, Enum):
    """Kinds of sortable entities on the board"""
    TASK = "Task"
    COLUMN = "Column"


@dataclass(frozen=True)
class HoverTarget:
    """Entity under the pointer during a drag, as reported by collision detection"""
    kind: DragKind
    id: str

    @property
    def is_task(self) -> bool:
        return self.kind == DragKind.TASK

    @property
    def is_column(self) -> bool:
        return self.kind == DragKind.COLUMN
