from dataclasses import dataclass


@dataclass(frozen=True)
class Column:
    """Модель колонки канбан-доски

    Columns are sortable entities like tasks, but dragging them is switched
    off through ``draggable``.
    """

    id: str
    title: str
    draggable: bool = False


# Фиксированный набор колонок, создается один раз на сессию
DEFAULT_COLUMNS = (
    Column(id="todo", title="Todo"),
    Column(id="doing", title="In Progress"),
    Column(id="done", title="Done"),
)
