"""Todo Stats — pure computation of completion counts over a record collection.

Invariants:
    - Single pass over the records (no IO)
    - active == total - completed, always
"""

from dataclasses import dataclass, asdict
from typing import Iterable

from app.core.todo import Todo


@dataclass(frozen=True)
class TodoStats:
    total: int = 0
    active: int = 0
    completed: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def compute_todo_stats(todos: Iterable[Todo]) -> TodoStats:
    """Count total and completed records in one pass. Pure, no IO."""
    total = 0
    completed = 0
    for todo in todos:
        total += 1
        if todo.completed:
            completed += 1
    return TodoStats(total=total, active=total - completed, completed=completed)
