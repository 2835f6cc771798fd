from typing import List, Optional
from pydantic import BaseModel

from src.schemas.column import ColumnView
from src.schemas.task import TaskResponse


class BoardResponse(BaseModel):
    """Read model handed to the renderer"""
    columns: List[ColumnView]
    active_task: Optional[TaskResponse] = None
