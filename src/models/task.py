from dataclasses import dataclass


@dataclass
class Task:
    """Модель карточки (задачи)

    Membership in a column is the ``column_id`` predicate; the position of a
    task lives only in the board's global sequence.
    """

    id: str
    column_id: str
    content: str


DEFAULT_TASKS = (
    ("1", "todo", "Create initial project plan"),
    ("2", "todo", "Design landing page"),
    ("3", "doing", "Implement authentication"),
    ("4", "done", "Setup CI/CD pipeline"),
)
