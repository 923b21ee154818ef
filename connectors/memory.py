"""In-memory repositories.

Implements the Repository interface over plain row lists. Used in demo mode
when no remote store is configured, and by the test suite. Rows are stored
in their serialized (remote) shape and parsed on the way out, so the same
boundary normalization applies as for live rows.
"""

import asyncio
from copy import deepcopy
from typing import Any, Dict, List, Optional, Type
from uuid import uuid4

from connectors.repository_base import Repository, RepositoryFailure, T
from connectors.seed_data import get_seed_rows
from core.models.records import RECORD_TYPES, RecordValidationError, parse_row, parse_rows, serialize_fields

OPERATIONS = ("list", "create", "update", "delete")


class InMemoryRepository(Repository[T]):
    """Repository over an in-process list of rows.

    Supports failure injection: `fail_next("create", "boom")` makes the next
    create raise RepositoryFailure("boom") without touching the rows.
    """

    def __init__(
        self,
        table: str,
        model: Type[T],
        rows: Optional[List[Dict[str, Any]]] = None,
        latency: float = 0.0,
    ):
        super().__init__(table, model)
        self.rows: List[Dict[str, Any]] = [serialize_fields(r) for r in (rows or [])]
        self.latency = latency
        self.calls: List[str] = []
        self._failures: Dict[str, List[str]] = {op: [] for op in OPERATIONS}

    def fail_next(self, operation: str, message: str = "Remote store unavailable") -> None:
        """Queue a failure for the next call of `operation`."""
        if operation not in OPERATIONS:
            raise ValueError(f"Unknown operation: {operation}")
        self._failures[operation].append(message)

    async def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if self.latency:
            await asyncio.sleep(self.latency)
        if self._failures[operation]:
            message = self._failures[operation].pop(0)
            raise RepositoryFailure(
                message,
                cause=ConnectionError(message),
                table=self.table,
                operation=operation,
            )

    def _parse(self, operation: str, rows: List[Dict[str, Any]]) -> List[T]:
        try:
            return parse_rows(self.model, deepcopy(rows))
        except RecordValidationError as e:
            raise RepositoryFailure(str(e), cause=e, table=self.table, operation=operation) from e

    def _index_of(self, record_id: str) -> Optional[int]:
        for i, row in enumerate(self.rows):
            if row.get("id") == record_id:
                return i
        return None

    async def list(self) -> List[T]:
        await self._enter("list")
        return self._parse("list", self.rows)

    async def list_where(
        self,
        column: str,
        equals: Optional[Any] = None,
        gte: Optional[Any] = None,
        lte: Optional[Any] = None,
    ) -> List[T]:
        await self._enter("list")
        bounds = serialize_fields({"equals": equals, "gte": gte, "lte": lte})

        def keep(row: Dict[str, Any]) -> bool:
            value = row.get(column)
            if bounds["equals"] is not None and value != bounds["equals"]:
                return False
            if bounds["gte"] is not None and (value is None or value < bounds["gte"]):
                return False
            if bounds["lte"] is not None and (value is None or value > bounds["lte"]):
                return False
            return True

        return self._parse("list", [row for row in self.rows if keep(row)])

    async def create(self, draft: Dict[str, Any]) -> T:
        await self._enter("create")
        row = serialize_fields(draft)
        if not row.get("id"):
            row["id"] = str(uuid4())
        if self._index_of(row["id"]) is not None:
            raise RepositoryFailure(
                f"Duplicate id {row['id']!r} in {self.table}",
                table=self.table,
                operation="create",
            )
        # Validate before storing so a rejected draft leaves no trace
        record = self._parse("create", [row])[0]
        self.rows.append(row)
        return record

    async def update(self, record_id: str, partial: Dict[str, Any]) -> T:
        await self._enter("update")
        index = self._index_of(record_id)
        if index is None:
            raise RepositoryFailure(
                f"Failed to update {self.table}: no row with id {record_id!r}",
                table=self.table,
                operation="update",
            )
        changes = serialize_fields(partial)
        changes.pop("id", None)
        row = {**self.rows[index], **changes}
        record = self._parse("update", [row])[0]
        self.rows[index] = row
        return record

    async def delete(self, record_id: str) -> None:
        await self._enter("delete")
        index = self._index_of(record_id)
        if index is not None:
            del self.rows[index]


def build_memory_repositories(seed: bool = True, latency: float = 0.0) -> Dict[str, InMemoryRepository]:
    """One in-memory repository per table, optionally seeded with sample rows."""
    return {
        table: InMemoryRepository(
            table,
            model,
            rows=get_seed_rows(table) if seed else [],
            latency=latency,
        )
        for table, model in RECORD_TYPES.items()
    }
