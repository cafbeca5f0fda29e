"""API Dependencies — hands the application's TodoStore to route handlers.

Invariants:
    - The store is created once by main.lifespan and stored on app.state
    - Routes never construct a store themselves (tests override get_todo_store)
"""

from fastapi import Request

from app.core.todo_store import TodoStore


def get_todo_store(request: Request) -> TodoStore:
    """FastAPI dependency — the process-wide store owned by the app."""
    return request.app.state.todo_store
