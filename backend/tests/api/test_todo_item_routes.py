"""Todo item routes — get, PATCH (update or toggle), toggle, PUT, DELETE.

Invariants:
    - Unknown id → 404 RESOURCE_NOT_FOUND; malformed id → 400
    - PATCH with empty body, null, a falsy scalar, {} or {"toggle": ...} toggles;
      any other object updates, truthy scalars and lists are rejected
    - PATCH rejects unknown fields, non-bool or null completed, malformed JSON with 400
"""

import pytest


async def test_get_existing_todo(client, seed):
    seed("A")
    res = await client.get("/api/v1/todos/1")
    assert res.status_code == 200
    assert res.json()["todo"]["title"] == "A"
    assert "timestamp" in res.json()["meta"]


async def test_get_missing_todo_returns_404(client):
    res = await client.get("/api/v1/todos/42")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["message"] == "Todo with ID 42 not found"
    assert error["context"]["todo_id"] == 42


@pytest.mark.parametrize("raw_id", ["0", "-3", "abc", str(2**53)])
async def test_invalid_id_returns_400(client, raw_id):
    res = await client.get(f"/api/v1/todos/{raw_id}")
    assert res.status_code == 400


async def test_patch_updates_supplied_fields(client, seed):
    seed("Old")
    res = await client.patch(
        "/api/v1/todos/1", json={"title": " New ", "completed": True},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["todo"]["title"] == "New"
    assert body["todo"]["completed"] is True
    assert body["meta"]["action"] == "updated"


@pytest.mark.parametrize("kwargs", [
    {},
    {"json": {}},
    {"json": {"toggle": True}},
    {"content": b"null", "headers": {"Content-Type": "application/json"}},
    {"content": b"false", "headers": {"Content-Type": "application/json"}},
    {"content": b"0", "headers": {"Content-Type": "application/json"}},
    {"content": b"\"\"", "headers": {"Content-Type": "application/json"}},
])
async def test_patch_without_fields_toggles(client, seed, kwargs):
    seed("A")
    res = await client.patch("/api/v1/todos/1", **kwargs)
    assert res.status_code == 200
    assert res.json()["todo"]["completed"] is True
    assert res.json()["meta"]["action"] == "toggled"


@pytest.mark.parametrize("raw", [b"true", b"5", b"\"text\"", b"[]"])
async def test_patch_truthy_scalar_or_list_body_returns_400(client, seed, raw):
    seed("A")
    res = await client.patch(
        "/api/v1/todos/1", content=raw,
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400


async def test_patch_blank_title_returns_400(client, seed):
    seed("Keep")
    res = await client.patch("/api/v1/todos/1", json={"title": "  "})
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Title is required"
    again = await client.get("/api/v1/todos/1")
    assert again.json()["todo"]["title"] == "Keep"


async def test_patch_unknown_field_returns_400(client, seed):
    seed("A")
    res = await client.patch("/api/v1/todos/1", json={"priority": "high"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_patch_non_bool_completed_returns_400(client, seed):
    seed("A")
    res = await client.patch("/api/v1/todos/1", json={"completed": "yes"})
    assert res.status_code == 400


async def test_patch_null_completed_returns_400_and_keeps_state(client, store):
    store.create("A")
    store.toggle(1)
    res = await client.patch("/api/v1/todos/1", json={"completed": None})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    again = await client.get("/api/v1/todos/1")
    assert again.json()["todo"]["completed"] is True


async def test_patch_malformed_json_returns_400(client, seed):
    seed("A")
    res = await client.patch(
        "/api/v1/todos/1", content=b"{oops",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_REQUEST"


async def test_patch_missing_todo_returns_404(client):
    res = await client.patch("/api/v1/todos/9", json={"title": "x"})
    assert res.status_code == 404


async def test_toggle_endpoint_flips_and_restores(client, seed):
    seed("A")
    first = await client.post("/api/v1/todos/1/toggle")
    second = await client.post("/api/v1/todos/1/toggle")
    assert first.json()["todo"]["completed"] is True
    assert second.json()["todo"]["completed"] is False


async def test_toggle_missing_todo_returns_404(client):
    res = await client.post("/api/v1/todos/5/toggle")
    assert res.status_code == 404


async def test_put_replaces_all_fields(client, store):
    store.create("Old", "old description")
    store.toggle(1)
    res = await client.put("/api/v1/todos/1", json={"title": "New"})
    assert res.status_code == 200
    todo = res.json()["todo"]
    assert todo["title"] == "New"
    assert todo["description"] == ""
    assert todo["completed"] is False
    assert res.json()["meta"]["action"] == "replaced"


async def test_put_requires_title(client, seed):
    seed("A")
    res = await client.put("/api/v1/todos/1", json={"title": ""})
    assert res.status_code == 400


async def test_delete_returns_removed_todo(client, seed):
    seed("A", "B")
    res = await client.delete("/api/v1/todos/2")
    assert res.status_code == 200
    body = res.json()
    assert body["todo"]["title"] == "B"
    assert body["message"] == "Todo with ID 2 has been deleted"
    assert body["meta"]["action"] == "deleted"
    missing = await client.get("/api/v1/todos/2")
    assert missing.status_code == 404


async def test_delete_missing_todo_returns_404(client):
    res = await client.delete("/api/v1/todos/3")
    assert res.status_code == 404


async def test_unsupported_method_returns_405(client, seed):
    seed("A")
    res = await client.post("/api/v1/todos/1")
    assert res.status_code == 405
