from src.models.column import Column, DEFAULT_COLUMNS
from src.models.task import Task, DEFAULT_TASKS
from src.models.drag import DragKind, HoverTarget
