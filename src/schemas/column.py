from typing import List
from pydantic import BaseModel

from src.schemas.task import TaskResponse


class ColumnResponse(BaseModel):
    """Schema for a board column"""
    id: str
    title: str
    draggable: bool = False

    class Config:
        from_attributes = True


class ColumnList(BaseModel):
    """Schema for list of columns"""
    columns: List[ColumnResponse]


class ColumnView(ColumnResponse):
    """Column with its tasks in display order"""
    task_count: int
    tasks: List[TaskResponse] = []
