from typing import Optional
from pydantic import BaseModel

from src.models.drag import DragKind, HoverTarget


class DragTarget(BaseModel):
    """Sortable entity reported by the pointer collaborator"""
    kind: DragKind
    id: str

    def to_hover_target(self) -> HoverTarget:
        return HoverTarget(kind=self.kind, id=self.id)


class DragStartEvent(BaseModel):
    """Schema for drag start notification"""
    active_id: str
    active_kind: DragKind = DragKind.TASK


class DragOverEvent(BaseModel):
    """Schema for drag over notification"""
    active_id: str
    active_kind: DragKind = DragKind.TASK
    over: Optional[DragTarget] = None


class DragEndEvent(BaseModel):
    """Schema for drag end (drop or cancel) notification"""
    active_id: str
    over: Optional[DragTarget] = None
