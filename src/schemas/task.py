from typing import List
from pydantic import BaseModel, Field


class TaskResponse(BaseModel):
    """Schema for task response"""
    id: str
    column_id: str
    content: str

    class Config:
        from_attributes = True


class TaskUpdate(BaseModel):
    """Schema for task content update"""
    content: str = Field(..., description="New card text")


class TaskList(BaseModel):
    """Schema for the global task sequence"""
    tasks: List[TaskResponse]
