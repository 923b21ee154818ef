"""
REST Client and Table Repository Tests

Runs the Supabase/PostgREST client against an in-process aiohttp application
that mimics the table API:
1. Key headers, filter encoding and Prefer headers are sent
2. HTTP errors map onto the StoreApiError hierarchy
3. TableRepository parses rows at the boundary and folds failures into
   RepositoryFailure
"""

import asyncio
from copy import deepcopy

import pytest
from aiohttp import web
from aiohttp import test_utils

from connectors.repository_base import RepositoryFailure
from connectors.supabase import (
    StoreApiConfig,
    StoreApiError,
    StoreAuthenticationError,
    StoreConnectionError,
    StoreNotFoundError,
    StoreValidationError,
    SupabaseRestClient,
    TableRepository,
    build_repositories,
)
from connectors.supabase.rest_client import encode_filters
from core.models.records import FinancialTransaction, Task, TaskPriority
from stores import TaskStore

KEY = "test-anon-key"

TASK_ROWS = [
    {"id": "T1", "title": "Feed calves", "category": "feeding", "due_date": "2024-01-01",
     "priority": "HIGH", "completed": False},
    {"id": "T2", "title": "Fix fence", "category": "general", "due_date": "2024-01-02",
     "priority": "low", "completed": True},
]

TRANSACTION_ROWS = [
    {"id": "F1", "date": "2024-01-05", "description": "Hay", "category": "Feed", "amount": -100,
     "status": "completed"},
    {"id": "F2", "date": "2024-02-10", "description": "Milk", "category": "Sales", "amount": 250,
     "status": "completed"},
    {"id": "F3", "date": "2024-03-15", "description": "Vet", "category": "Medical", "amount": -80,
     "status": "pending"},
]


# =============================================================================
# Fake table API
# =============================================================================

def _matches(row, filters):
    for column, expression in filters:
        operator, _, value = expression.partition(".")
        cell = row.get(column)
        cell = str(cell).lower() if isinstance(cell, bool) else str(cell)
        if operator == "eq" and cell != value:
            return False
        if operator == "gte" and cell < value:
            return False
        if operator == "lte" and cell > value:
            return False
    return True


def make_store_app(tables):
    """aiohttp app serving `/rest/v1/{table}` from in-memory rows."""
    app = web.Application()
    app["requests"] = []

    async def handle(request: web.Request) -> web.StreamResponse:
        table = request.match_info["table"]
        app["requests"].append({
            "method": request.method,
            "table": table,
            "query": list(request.query.items()),
            "headers": dict(request.headers),
        })

        if request.headers.get("apikey") != KEY:
            return web.json_response({"message": "Invalid API key"}, status=401)
        if table not in tables:
            return web.json_response({"message": f'relation "{table}" does not exist'}, status=404)

        rows = tables[table]
        filters = [(k, v) for k, v in request.query.items() if k not in ("select", "order")]

        if request.method == "GET":
            return web.json_response([r for r in rows if _matches(r, filters)])

        if request.method == "POST":
            body = await request.json()
            new_rows = body if isinstance(body, list) else [body]
            if any(not r.get("title") for r in new_rows if table == "tasks"):
                return web.json_response({"message": 'null value in column "title"'}, status=400)
            rows.extend(deepcopy(new_rows))
            return web.json_response(new_rows, status=201)

        if request.method == "PATCH":
            changes = await request.json()
            updated = []
            for row in rows:
                if _matches(row, filters):
                    row.update(changes)
                    updated.append(row)
            return web.json_response(updated)

        if request.method == "DELETE":
            tables[table] = [r for r in rows if not _matches(r, filters)]
            return web.Response(status=204)

        return web.json_response({"message": "method not allowed"}, status=405)

    app.router.add_route("*", "/rest/v1/{table}", handle)
    return app


def run_against_app(app, scenario, key=KEY, timeout=None):
    """Serve `app`, connect a client and run `scenario(client, app)`."""
    async def main():
        async with test_utils.TestServer(app) as server:
            config = StoreApiConfig(url=str(server.make_url("/")), key=key, timeout=timeout)
            async with SupabaseRestClient(config) as client:
                return await scenario(client, app)

    return asyncio.run(main())


def run_against_store(tables, scenario, key=KEY):
    """Start the fake API, connect a client and run `scenario(client, app)`."""
    return run_against_app(make_store_app(tables), scenario, key=key)


@pytest.fixture
def tables():
    return {
        "tasks": deepcopy(TASK_ROWS),
        "financial_transactions": deepcopy(TRANSACTION_ROWS),
    }


# =============================================================================
# REST client
# =============================================================================

def test_encode_filters():
    assert encode_filters([
        ("due_date", "eq", "2024-01-01"),
        ("date", "gte", "2024-01-01"),
        ("completed", "eq", True),
    ]) == [
        ("due_date", "eq.2024-01-01"),
        ("date", "gte.2024-01-01"),
        ("completed", "eq.true"),
    ]
    with pytest.raises(ValueError):
        encode_filters([("x", "like", "y")])


def test_table_url():
    config = StoreApiConfig(url="https://xyz.supabase.co/", key=KEY)
    assert config.get_table_url("tasks") == "https://xyz.supabase.co/rest/v1/tasks"


class TestRestClient:

    def test_select_sends_key_headers(self, tables):
        async def scenario(client, app):
            rows = await client.select("tasks")
            return rows, app["requests"][-1]

        rows, request = run_against_store(tables, scenario)
        assert [r["id"] for r in rows] == ["T1", "T2"]
        assert request["headers"]["apikey"] == KEY
        assert request["headers"]["Authorization"] == f"Bearer {KEY}"
        assert ("select", "*") in request["query"]

    def test_select_with_filters(self, tables):
        async def scenario(client, app):
            return await client.select(
                "financial_transactions",
                [("date", "gte", "2024-02-01"), ("date", "lte", "2024-02-28")],
            )

        rows = run_against_store(tables, scenario)
        assert [r["id"] for r in rows] == ["F2"]

    def test_insert_returns_representation(self, tables):
        async def scenario(client, app):
            rows = await client.insert("tasks", {"id": "T3", "title": "New", "due_date": "2024-01-03"})
            return rows, app["requests"][-1]

        rows, request = run_against_store(tables, scenario)
        assert rows[0]["id"] == "T3"
        assert request["headers"]["Prefer"] == "return=representation"
        assert len(tables["tasks"]) == 3

    def test_update_and_delete_match_on_id(self, tables):
        async def scenario(client, app):
            updated = await client.update("tasks", "T1", {"completed": True})
            await client.delete("tasks", "T2")
            return updated, app["requests"]

        updated, requests = run_against_store(tables, scenario)
        assert updated[0]["completed"] is True
        assert ("id", "eq.T1") in requests[0]["query"]
        assert requests[1]["method"] == "DELETE"
        assert [r["id"] for r in tables["tasks"]] == ["T1"]

    def test_bad_key_raises_authentication_error(self, tables):
        async def scenario(client, app):
            await client.select("tasks")

        with pytest.raises(StoreAuthenticationError) as exc_info:
            run_against_store(tables, scenario, key="wrong")
        assert exc_info.value.status_code == 401

    def test_unknown_table_raises_not_found(self, tables):
        async def scenario(client, app):
            await client.select("barns")

        with pytest.raises(StoreNotFoundError):
            run_against_store(tables, scenario)

    def test_rejected_row_raises_validation_error(self, tables):
        async def scenario(client, app):
            await client.insert("tasks", {"id": "T9", "due_date": "2024-01-01"})

        with pytest.raises(StoreValidationError) as exc_info:
            run_against_store(tables, scenario)
        assert 'null value in column "title"' in str(exc_info.value)

    def test_transport_failure_raises_connection_error(self):
        async def main():
            config = StoreApiConfig(url="http://127.0.0.1:1", key=KEY)
            async with SupabaseRestClient(config) as client:
                await client.select("tasks")

        with pytest.raises(StoreConnectionError):
            asyncio.run(main())

    def test_requires_connect(self):
        client = SupabaseRestClient(StoreApiConfig(url="http://localhost", key=KEY))
        assert not client.is_connected
        with pytest.raises(StoreApiError):
            asyncio.run(client.select("tasks"))


# =============================================================================
# Table repositories
# =============================================================================

class TestTableRepository:

    def test_list_normalizes_rows(self, tables):
        async def scenario(client, app):
            return await TableRepository(client, "tasks", Task).list()

        tasks = run_against_store(tables, scenario)
        assert tasks[0].priority == TaskPriority.HIGH
        assert isinstance(tasks[1], Task)

    def test_list_where_range(self, tables):
        async def scenario(client, app):
            repo = TableRepository(client, "financial_transactions", FinancialTransaction)
            return await repo.list_where("date", gte="2024-01-01", lte="2024-02-28")

        rows = run_against_store(tables, scenario)
        assert [r.id for r in rows] == ["F1", "F2"]

    def test_create_assigns_id(self, tables):
        async def scenario(client, app):
            repo = TableRepository(client, "tasks", Task)
            return await repo.create({"title": "Move herd", "due_date": "2024-04-01", "completed": False})

        task = run_against_store(tables, scenario)
        assert task.id
        assert task.title == "Move herd"
        assert tables["tasks"][-1]["id"] == task.id

    def test_update_without_row_is_failure(self, tables):
        async def scenario(client, app):
            await TableRepository(client, "tasks", Task).update("missing", {"completed": True})

        with pytest.raises(RepositoryFailure) as exc_info:
            run_against_store(tables, scenario)
        assert "no row returned" in exc_info.value.message
        assert exc_info.value.operation == "update"

    def test_http_error_becomes_repository_failure(self, tables):
        async def scenario(client, app):
            await TableRepository(client, "tasks", Task).list()

        with pytest.raises(RepositoryFailure) as exc_info:
            run_against_store(tables, scenario, key="wrong")
        assert isinstance(exc_info.value.cause, StoreAuthenticationError)
        assert exc_info.value.table == "tasks"

    def test_unparseable_row_becomes_repository_failure(self, tables):
        tables["tasks"].append({"id": "T9", "due_date": "not a date", "title": "Broken"})

        async def scenario(client, app):
            await TableRepository(client, "tasks", Task).list()

        with pytest.raises(RepositoryFailure) as exc_info:
            run_against_store(tables, scenario)
        assert "invalid tasks record" in exc_info.value.message

    def test_build_repositories_covers_every_table(self):
        client = SupabaseRestClient(StoreApiConfig(url="http://localhost", key=KEY))
        repos = build_repositories(client)
        assert set(repos) == {
            "livestock", "tasks", "financial_transactions", "health_records",
            "vaccination_schedules", "feeding_schedules", "feed_inventory",
        }


# =============================================================================
# Misbehaving store
# =============================================================================

def make_slow_app(delay):
    app = web.Application()

    async def handle(request: web.Request) -> web.StreamResponse:
        await asyncio.sleep(delay)
        return web.json_response([])

    app.router.add_get("/rest/v1/{table}", handle)
    return app


def make_object_app():
    app = web.Application()

    async def handle(request: web.Request) -> web.StreamResponse:
        return web.json_response({"id": "T1", "title": "Not a list"})

    app.router.add_get("/rest/v1/{table}", handle)
    return app


def test_transport_timeout_raises_connection_error():
    async def scenario(client, app):
        await client.select("tasks")

    with pytest.raises(StoreConnectionError) as exc_info:
        run_against_app(make_slow_app(0.5), scenario, timeout=0.05)
    assert "timed out" in str(exc_info.value)


def test_transport_timeout_is_recovered_by_the_store():
    async def scenario(client, app):
        store = TaskStore(TableRepository(client, "tasks", Task))
        loaded = await store.load()
        return loaded, store

    loaded, store = run_against_app(make_slow_app(0.5), scenario, timeout=0.05)
    assert loaded is False
    assert store.items == []
    assert store.is_loading is False
    assert isinstance(store.last_error.cause, StoreConnectionError)
    assert store.notifier.latest().variant == "destructive"


def test_non_array_select_is_malformed():
    async def scenario(client, app):
        await client.select("tasks")

    with pytest.raises(StoreApiError) as exc_info:
        run_against_app(make_object_app(), scenario)
    assert "expected a JSON array" in str(exc_info.value)


def test_non_array_select_becomes_repository_failure():
    async def scenario(client, app):
        await TableRepository(client, "tasks", Task).list()

    with pytest.raises(RepositoryFailure) as exc_info:
        run_against_app(make_object_app(), scenario)
    assert exc_info.value.operation == "load"
