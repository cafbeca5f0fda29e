"""API test fixtures — FastAPI test client bound to a fresh TodoStore.

Invariants:
    - Every test gets its own empty TodoStore (ids start at 1)
    - get_todo_store overridden; app.state is never touched
    - httpx ASGITransport does not run the lifespan
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_todo_store
from app.core.todo_store import TodoStore
from app.main import app


@pytest.fixture
def store():
    return TodoStore(cache_size=5)


@pytest.fixture
async def client(store):
    """FastAPI test client with the store dependency overridden."""
    app.dependency_overrides[get_todo_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def seed(store):
    """Insert todos directly into the store. Returns the created records."""
    def _seed(*titles: str):
        return [store.create(title) for title in titles]
    return _seed
