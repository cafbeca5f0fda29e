"""Todo Route Helpers — response envelope and not-found mapping shared by todo routes.

Invariants:
    - Every success body carries meta.timestamp (UTC, ISO-8601)
    - 200 responses are Cache-Control: no-cache; other 2xx are no-store
    - A None from the store becomes ResourceNotFoundError (404) here, nowhere else
"""

from datetime import datetime, timezone

from fastapi import Response, status

from app.core.errors import ResourceNotFoundError
from app.core.todo import Todo


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_meta(action: str | None = None, **fields) -> dict:
    meta = {**fields, "timestamp": utc_timestamp()}
    if action:
        meta["action"] = action
    return meta


def set_cache_headers(response: Response, status_code: int = status.HTTP_200_OK) -> None:
    response.headers["Cache-Control"] = (
        "no-cache" if status_code == status.HTTP_200_OK else "no-store"
    )


def require_todo(todo: Todo | None, todo_id: int) -> Todo:
    """Map the store's not-found sentinel to a 404."""
    if todo is None:
        raise ResourceNotFoundError("Todo", todo_id)
    return todo
