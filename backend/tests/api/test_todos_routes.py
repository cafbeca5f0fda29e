"""Todo collection routes — list/filter, create, stats, bulk, clear-all.

Invariants:
    - POST returns 201 with no-store; GET returns 200 with no-cache
    - Blank title → 400 VALIDATION_ERROR envelope from the store
    - Unknown status → 400; long q truncated to 100 chars
    - Bulk endpoints report requested vs affected counts
"""

import pytest


async def test_create_returns_201_with_todo_and_meta(client):
    res = await client.post(
        "/api/v1/todos", json={"title": " Buy milk ", "description": "2L"},
    )
    assert res.status_code == 201
    assert res.headers["cache-control"] == "no-store"
    body = res.json()
    assert body["todo"]["id"] == 1
    assert body["todo"]["title"] == "Buy milk"
    assert body["todo"]["completed"] is False
    assert "createdAt" in body["todo"]
    assert body["meta"]["created"] is True
    assert "timestamp" in body["meta"]


async def test_create_blank_title_returns_400(client):
    res = await client.post("/api/v1/todos", json={"title": "   "})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "Title is required"
    assert error["context"]["field"] == "title"


async def test_create_title_too_long_returns_400(client):
    res = await client.post("/api/v1/todos", json={"title": "x" * 201})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_missing_title_returns_400(client):
    res = await client.post("/api/v1/todos", json={"description": "no title"})
    assert res.status_code == 400


async def test_create_invalid_json_returns_400(client):
    res = await client.post(
        "/api/v1/todos", content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400


async def test_list_returns_all_in_insertion_order(client, seed):
    seed("A", "B", "C")
    res = await client.get("/api/v1/todos")
    assert res.status_code == 200
    assert res.headers["cache-control"] == "no-cache"
    body = res.json()
    assert [t["title"] for t in body["todos"]] == ["A", "B", "C"]
    assert body["meta"]["count"] == 3
    assert body["meta"]["status"] == "all"
    assert body["meta"]["query"] == ""
    assert "stats" not in body


async def test_list_filters_by_status_and_text(client, seed, store):
    seed("Buy milk", "Pay bills")
    store.toggle(1)
    res = await client.get("/api/v1/todos", params={"status": "active"})
    assert [t["id"] for t in res.json()["todos"]] == [2]
    res = await client.get("/api/v1/todos", params={"q": "MILK"})
    assert [t["id"] for t in res.json()["todos"]] == [1]


async def test_list_includes_stats_on_request(client, seed, store):
    seed("A", "B")
    store.toggle(2)
    res = await client.get("/api/v1/todos", params={"includeStats": "true"})
    assert res.json()["stats"] == {"total": 2, "active": 1, "completed": 1}


async def test_list_rejects_unknown_status(client):
    res = await client.get("/api/v1/todos", params={"status": "done"})
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "query.status"


async def test_list_truncates_long_query(client):
    res = await client.get("/api/v1/todos", params={"q": "q" * 150})
    assert res.status_code == 200
    assert res.json()["meta"]["query"] == "q" * 100


async def test_list_reflects_mutation_made_through_api(client):
    await client.post("/api/v1/todos", json={"title": "A"})
    first = await client.get("/api/v1/todos")
    await client.post("/api/v1/todos", json={"title": "B"})
    second = await client.get("/api/v1/todos")
    assert first.json()["meta"]["count"] == 1
    assert second.json()["meta"]["count"] == 2


async def test_stats_endpoint(client, seed):
    seed("A")
    res = await client.get("/api/v1/todos/stats")
    assert res.status_code == 200
    assert res.json()["stats"] == {"total": 1, "active": 1, "completed": 0}


async def test_clear_all_returns_count_and_resets_ids(client, seed):
    seed("A", "B")
    res = await client.delete("/api/v1/todos")
    assert res.status_code == 200
    assert res.json()["deleted"] == 2
    assert res.json()["meta"]["action"] == "cleared"
    created = await client.post("/api/v1/todos", json={"title": "C"})
    assert created.json()["todo"]["id"] == 1


async def test_bulk_toggle_skips_unknown_ids(client, seed):
    seed("A", "B", "C")
    res = await client.post("/api/v1/todos/bulk/toggle", json={"ids": [3, 1, 99]})
    assert res.status_code == 200
    body = res.json()
    assert [t["id"] for t in body["todos"]] == [1, 3]
    assert all(t["completed"] for t in body["todos"])
    assert body["meta"]["count"] == 2
    assert body["meta"]["requested"] == 3
    assert body["meta"]["action"] == "toggled"


async def test_bulk_delete_removes_matches(client, seed):
    seed("A", "B", "C")
    res = await client.post("/api/v1/todos/bulk/delete", json={"ids": [2]})
    assert [t["title"] for t in res.json()["todos"]] == ["B"]
    listing = await client.get("/api/v1/todos")
    assert [t["title"] for t in listing.json()["todos"]] == ["A", "C"]


@pytest.mark.parametrize("body", [{"ids": []}, {"ids": [0]}, {"ids": "1"}, {}])
async def test_bulk_rejects_invalid_ids(client, body):
    res = await client.post("/api/v1/todos/bulk/delete", json=body)
    assert res.status_code == 400
