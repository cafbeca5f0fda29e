"""Todo Collection Routes — list/filter, create, stats, bulk operations, clear-all.

Invariants:
    - status validated against StatusFilter by FastAPI (400 on unknown value)
    - q truncated to settings.max_query_length before reaching the store
    - Bulk operations skip unknown ids; meta.requested vs meta.count lets
      clients diff what was not found
    - Routes never contain business logic (delegate to TodoStore)

Design Decisions:
    - Registered BEFORE todo_item.router so /stats and /bulk/* are not
      captured by /{todo_id}
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies import get_todo_store
from app.api.routes.todo_helpers import build_meta, set_cache_headers
from app.config import Settings, get_settings
from app.core.domain_types import StatusFilter
from app.core.todo_store import TodoStore
from app.schemas.todo import BulkIdsRequest, TodoCreate, TodoResponse, serialize_todos

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/todos", tags=["todos"])


@router.get("")
async def list_todos(
    response: Response,
    status_filter: StatusFilter = Query(StatusFilter.ALL, alias="status"),
    q: str = Query(""),
    include_stats: bool = Query(False, alias="includeStats"),
    store: TodoStore = Depends(get_todo_store),
    settings: Settings = Depends(get_settings),
):
    """List todos filtered by status and text (?status=&q=&includeStats=)."""
    query = q[: settings.max_query_length]
    todos = store.query(status_filter, query)
    body = {
        "todos": serialize_todos(todos),
        "meta": build_meta(
            count=len(todos), query=query, status=status_filter.value,
        ),
    }
    if include_stats:
        body["stats"] = store.stats().to_dict()
    set_cache_headers(response)
    return body


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_todo(
    body: TodoCreate,
    response: Response,
    store: TodoStore = Depends(get_todo_store),
):
    """Create a todo. Blank titles are rejected by the store (400)."""
    todo = store.create(body.title, body.description)
    set_cache_headers(response, status.HTTP_201_CREATED)
    return {
        "todo": TodoResponse.serialize(todo),
        "meta": build_meta(created=True),
    }


@router.get("/stats")
async def get_stats(
    response: Response, store: TodoStore = Depends(get_todo_store),
):
    """Counts by completion state."""
    set_cache_headers(response)
    return {"stats": store.stats().to_dict(), "meta": build_meta()}


@router.delete("")
async def clear_todos(
    response: Response, store: TodoStore = Depends(get_todo_store),
):
    """Delete every todo and restart ids at 1."""
    count = store.clear_all()
    set_cache_headers(response)
    return {"deleted": count, "meta": build_meta(action="cleared")}


@router.post("/bulk/toggle")
async def bulk_toggle_todos(
    body: BulkIdsRequest,
    response: Response,
    store: TodoStore = Depends(get_todo_store),
):
    """Toggle completion of every listed todo that exists."""
    todos = store.bulk_toggle(body.ids)
    set_cache_headers(response)
    return {
        "todos": serialize_todos(todos),
        "meta": build_meta(
            action="toggled", count=len(todos), requested=len(set(body.ids)),
        ),
    }


@router.post("/bulk/delete")
async def bulk_delete_todos(
    body: BulkIdsRequest,
    response: Response,
    store: TodoStore = Depends(get_todo_store),
):
    """Delete every listed todo that exists."""
    todos = store.bulk_delete(body.ids)
    set_cache_headers(response)
    return {
        "todos": serialize_todos(todos),
        "meta": build_meta(
            action="deleted", count=len(todos), requested=len(set(body.ids)),
        ),
    }
