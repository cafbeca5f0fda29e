"""Todo Item Routes — get, update, toggle, replace and delete a single todo.

Invariants:
    - todo_id validated by FastAPI (positive int <= MAX_TODO_ID, else 400)
    - Store None → 404 via require_todo
    - PATCH decides toggle vs update from the parsed body; the store is only
      ever asked for one explicit operation
"""

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.api.dependencies import get_todo_store
from app.api.routes.todo_helpers import build_meta, require_todo, set_cache_headers
from app.core.domain_types import MAX_TODO_ID
from app.core.errors import InvalidRequestError
from app.core.todo_store import TodoStore
from app.schemas.todo import TodoReplace, TodoResponse, TodoUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/todos", tags=["todos"])

TodoIdPath = Annotated[int, Path(ge=1, le=MAX_TODO_ID, description="Todo id")]


def is_toggle_request(body: Any) -> bool:
    """Empty body, null, a falsy scalar (false, 0, ""), {} or {"toggle": ...} alone mean "toggle"."""
    if body is None:
        return True
    if isinstance(body, (bool, int, float, str)) and not body:
        return True
    return isinstance(body, dict) and (not body or set(body) == {"toggle"})


async def _read_json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InvalidRequestError("Invalid JSON in request body") from None


def _item_response(response: Response, todo, action: str | None = None, **extra) -> dict:
    set_cache_headers(response)
    return {
        "todo": TodoResponse.serialize(todo),
        **extra,
        "meta": build_meta(action=action),
    }


@router.get("/{todo_id}")
async def get_todo(
    response: Response,
    todo_id: TodoIdPath,
    store: TodoStore = Depends(get_todo_store),
):
    """Get a single todo."""
    todo = require_todo(store.find_by_id(todo_id), todo_id)
    return _item_response(response, todo)


@router.patch("/{todo_id}")
async def patch_todo(
    request: Request,
    response: Response,
    todo_id: TodoIdPath,
    store: TodoStore = Depends(get_todo_store),
):
    """Update supplied fields, or toggle when the body carries no fields."""
    body = await _read_json_body(request)
    if is_toggle_request(body):
        logger.debug("PATCH body carries no fields, toggling", extra={"todo_id": todo_id})
        todo = require_todo(store.toggle(todo_id), todo_id)
        return _item_response(response, todo, action="toggled")

    try:
        update = TodoUpdate.model_validate(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from None
    todo = require_todo(store.update(todo_id, update.to_changes()), todo_id)
    return _item_response(response, todo, action="updated")


@router.post("/{todo_id}/toggle")
async def toggle_todo(
    response: Response,
    todo_id: TodoIdPath,
    store: TodoStore = Depends(get_todo_store),
):
    """Flip completion state."""
    todo = require_todo(store.toggle(todo_id), todo_id)
    return _item_response(response, todo, action="toggled")


@router.put("/{todo_id}")
async def replace_todo(
    body: TodoReplace,
    response: Response,
    todo_id: TodoIdPath,
    store: TodoStore = Depends(get_todo_store),
):
    """Replace title, description and completed in one go."""
    todo = require_todo(store.update(todo_id, body.to_changes()), todo_id)
    return _item_response(response, todo, action="replaced")


@router.delete("/{todo_id}")
async def delete_todo(
    response: Response,
    todo_id: TodoIdPath,
    store: TodoStore = Depends(get_todo_store),
):
    """Delete a todo and return it."""
    todo = require_todo(store.delete(todo_id), todo_id)
    return _item_response(
        response, todo, action="deleted",
        message=f"Todo with ID {todo_id} has been deleted",
    )
