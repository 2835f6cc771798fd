from src.schemas.task import TaskResponse, TaskUpdate, TaskList
from src.schemas.column import ColumnResponse, ColumnList, ColumnView
from src.schemas.board import BoardResponse
from src.schemas.drag import DragTarget, DragStartEvent, DragOverEvent, DragEndEvent
