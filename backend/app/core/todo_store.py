"""Todo Store — authoritative in-memory todo collection with a cached query engine.

Invariants:
    - Ids come from a counter starting at 1; never reused until clear_all()
    - Collection order is insertion order; update/toggle keep a record's position
    - Title is trimmed and non-empty after every successful create/update
    - Every mutation that changed something clears the whole query cache, so a
      query result always reflects the latest completed mutation
    - id-keyed operations return None for unknown ids (no exception)
    - One RLock guards records, counter and cache for every compound sequence

Design Decisions:
    - Explicit object owned by the composition root (main.lifespan), not a
      module-level singleton
    - Records are frozen dataclasses; results share them without copying
    - Whole-cache invalidation over per-key invalidation
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping

from app.core.domain_types import (
    DEFAULT_QUERY_CACHE_SIZE,
    UPDATABLE_FIELDS,
    QueryKey,
    StatusFilter,
    TodoId,
)
from app.core.errors import ErrorContext, TodoValidationError
from app.core.query_cache import QueryCache
from app.core.todo import Todo
from app.core.todo_stats import TodoStats, compute_todo_stats

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _require_title(title: Any, todo_id: int | None = None) -> str:
    """Trim title and reject blank values."""
    trimmed = title.strip() if isinstance(title, str) else ""
    if not trimmed:
        raise TodoValidationError(
            "Title is required", "title", ErrorContext(todo_id=todo_id),
        )
    return trimmed


def normalize_status(status: StatusFilter | str | None) -> StatusFilter:
    """Map a raw status value to StatusFilter. None means 'all'."""
    if status is None:
        return StatusFilter.ALL
    try:
        return StatusFilter(status)
    except ValueError:
        valid = ", ".join(s.value for s in StatusFilter)
        raise TodoValidationError(
            f"Invalid status. Must be one of: {valid}", "status",
        ) from None


class TodoStore:
    """In-memory todo collection, query engine and mutation API."""

    def __init__(
        self,
        cache_size: int = DEFAULT_QUERY_CACHE_SIZE,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._todos: list[Todo] = []
        self._next_id = 1
        self._clock = clock
        self._lock = threading.RLock()
        self.cache: QueryCache[QueryKey, tuple[Todo, ...]] = QueryCache(cache_size)

    def __len__(self) -> int:
        return len(self._todos)

    def _invalidate(self) -> None:
        self.cache.clear()

    def _index_of(self, todo_id: int) -> int | None:
        for i, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return i
        return None

    # ─── Query Engine ───────────────────────────────────────────

    def query(
        self, status: StatusFilter | str | None = StatusFilter.ALL, text: str | None = "",
    ) -> list[Todo]:
        """Filter by status then by case-insensitive text. Cached per (status, text)."""
        status = normalize_status(status)
        text = text or ""
        key: QueryKey = (status.value, text)

        with self._lock:
            cached = self.cache.get(key)
            logger.debug(
                f"Query cache {'hit' if cached is not None else 'miss'} for {key!r}",
                extra={"cache_hits": self.cache.hits, "cache_misses": self.cache.misses},
            )
            if cached is not None:
                return list(cached)

            results: Iterable[Todo] = self._todos
            if status is not StatusFilter.ALL:
                want_completed = status is StatusFilter.COMPLETED
                results = [t for t in results if t.completed == want_completed]
            if text:
                needle = text.lower()
                results = [t for t in results if t.matches_text(needle)]

            snapshot = tuple(results)
            self.cache.put(key, snapshot)
        return list(snapshot)

    # ─── Record Store ───────────────────────────────────────────

    def find_by_id(self, todo_id: int) -> Todo | None:
        with self._lock:
            idx = self._index_of(todo_id)
            return None if idx is None else self._todos[idx]

    def create(self, title: str, description: str | None = "") -> Todo:
        """Append a new active todo. Raises TodoValidationError on blank title."""
        clean_title = _require_title(title)
        with self._lock:
            todo = Todo(
                id=TodoId(self._next_id),
                title=clean_title,
                description=(description or "").strip(),
                completed=False,
                created_at=self._clock(),
            )
            self._next_id += 1
            self._todos.append(todo)
            self._invalidate()
        logger.info("Todo created", extra={"todo_id": todo.id})
        return todo

    def update(self, todo_id: int, changes: Mapping[str, Any]) -> Todo | None:
        """Apply only the supplied fields. None if the id is unknown.

        Raises TodoValidationError for unknown fields, a blank title or a
        non-bool completed.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            name = sorted(unknown)[0]
            raise TodoValidationError(
                f"Field '{name}' is not allowed for updates", name,
                ErrorContext(todo_id=todo_id),
            )
        fields: dict[str, Any] = {}
        if "title" in changes:
            fields["title"] = _require_title(changes["title"], todo_id)
        if "description" in changes:
            fields["description"] = (changes["description"] or "").strip()
        if "completed" in changes:
            if not isinstance(changes["completed"], bool):
                raise TodoValidationError(
                    "Completed status must be a boolean", "completed",
                    ErrorContext(todo_id=todo_id),
                )
            fields["completed"] = changes["completed"]

        with self._lock:
            idx = self._index_of(todo_id)
            if idx is None:
                return None
            current = self._todos[idx]
            updated = Todo(
                id=current.id,
                title=fields.get("title", current.title),
                description=fields.get("description", current.description),
                completed=fields.get("completed", current.completed),
                created_at=current.created_at,
            )
            self._todos[idx] = updated
            self._invalidate()
        logger.info(
            f"Todo updated ({', '.join(sorted(fields)) or 'no fields'})",
            extra={"todo_id": todo_id},
        )
        return updated

    def toggle(self, todo_id: int) -> Todo | None:
        with self._lock:
            idx = self._index_of(todo_id)
            if idx is None:
                return None
            toggled = self._todos[idx].toggled()
            self._todos[idx] = toggled
            self._invalidate()
        logger.info(
            f"Todo toggled (completed={toggled.completed})",
            extra={"todo_id": todo_id},
        )
        return toggled

    def delete(self, todo_id: int) -> Todo | None:
        with self._lock:
            idx = self._index_of(todo_id)
            if idx is None:
                return None
            removed = self._todos.pop(idx)
            self._invalidate()
        logger.info("Todo deleted", extra={"todo_id": todo_id})
        return removed

    def bulk_toggle(self, todo_ids: Iterable[int]) -> list[Todo]:
        """Toggle every matching record in collection order. Unknown ids skipped."""
        wanted = set(todo_ids)
        toggled: list[Todo] = []
        with self._lock:
            for i, todo in enumerate(self._todos):
                if todo.id in wanted:
                    self._todos[i] = todo.toggled()
                    toggled.append(self._todos[i])
            if toggled:
                self._invalidate()
        logger.info(
            f"Bulk toggle affected {len(toggled)}/{len(wanted)} todos",
            extra={"count": len(toggled)},
        )
        return toggled

    def bulk_delete(self, todo_ids: Iterable[int]) -> list[Todo]:
        """Remove every matching record; survivors keep their relative order."""
        wanted = set(todo_ids)
        with self._lock:
            removed = [t for t in self._todos if t.id in wanted]
            if removed:
                self._todos = [t for t in self._todos if t.id not in wanted]
                self._invalidate()
        logger.info(
            f"Bulk delete removed {len(removed)}/{len(wanted)} todos",
            extra={"count": len(removed)},
        )
        return removed

    def stats(self) -> TodoStats:
        with self._lock:
            return compute_todo_stats(self._todos)

    def clear_all(self) -> int:
        """Drop every record and restart ids at 1. Returns the count removed."""
        with self._lock:
            count = len(self._todos)
            self._todos = []
            self._next_id = 1
            self._invalidate()
        logger.warning(f"All todos cleared ({count} removed)", extra={"count": count})
        return count
