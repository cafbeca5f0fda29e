"""Todo Record — the single resource held by the store.

Invariants:
    - Records are frozen: the store replaces a record instead of editing it
    - title is trimmed and non-empty once a record exists
    - id and created_at never change after creation
"""

from dataclasses import dataclass, replace
from datetime import datetime

from app.core.domain_types import TodoId


@dataclass(frozen=True)
class Todo:
    """A single todo item — pure value, no IO."""

    id: TodoId
    title: str
    description: str
    completed: bool
    created_at: datetime

    def toggled(self) -> "Todo":
        return replace(self, completed=not self.completed)

    def matches_text(self, needle: str) -> bool:
        """Case-insensitive substring match on title or description.

        Caller passes the needle already lowercased.
        """
        return (
            needle in self.title.lower()
            or needle in self.description.lower()
        )
