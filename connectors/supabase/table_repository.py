"""Table repositories backed by the Supabase REST client.

Each repository translates one entity's list/create/update/delete into REST
calls, parses the returned rows at the boundary and folds every failure into
a single RepositoryFailure shape.
"""

from typing import Any, Dict, List, Optional, Type
from uuid import uuid4

from connectors.repository_base import Repository, RepositoryFailure, T
from connectors.supabase.rest_client import StoreApiError, SupabaseRestClient
from core.models.records import RECORD_TYPES, RecordValidationError, parse_row, parse_rows, serialize_fields
from core.observability.logging import get_logger, with_correlation

logger = get_logger(__name__)


class TableRepository(Repository[T]):
    """Repository over one PostgREST table."""

    def __init__(self, client: SupabaseRestClient, table: str, model: Type[T]):
        super().__init__(table, model)
        self.client = client

    def _failure(self, operation: str, error: Exception) -> RepositoryFailure:
        if isinstance(error, RecordValidationError):
            message = f"Received an invalid {self.table} record: {error}"
        else:
            message = f"Failed to {operation} {self.table.replace('_', ' ')}: {error}"
        logger.error(message, extra_fields={"error_type": type(error).__name__})
        return RepositoryFailure(message, cause=error, table=self.table, operation=operation)

    async def list(self) -> List[T]:
        with with_correlation(table=self.table, operation="list"):
            try:
                rows = await self.client.select(self.table)
                return parse_rows(self.model, rows)
            except (StoreApiError, RecordValidationError) as e:
                raise self._failure("load", e) from e

    async def list_where(
        self,
        column: str,
        equals: Optional[Any] = None,
        gte: Optional[Any] = None,
        lte: Optional[Any] = None,
    ) -> List[T]:
        filters = []
        if equals is not None:
            filters.append((column, "eq", equals))
        if gte is not None:
            filters.append((column, "gte", gte))
        if lte is not None:
            filters.append((column, "lte", lte))

        with with_correlation(table=self.table, operation="list"):
            try:
                rows = await self.client.select(self.table, filters)
                return parse_rows(self.model, rows)
            except (StoreApiError, RecordValidationError) as e:
                raise self._failure("load", e) from e

    async def create(self, draft: Dict[str, Any]) -> T:
        row = serialize_fields(draft)
        if not row.get("id"):
            row["id"] = str(uuid4())

        with with_correlation(table=self.table, operation="create", entity_id=row["id"]):
            try:
                rows = await self.client.insert(self.table, row)
                if not rows:
                    raise StoreApiError("no row returned")
                return parse_row(self.model, rows[0])
            except (StoreApiError, RecordValidationError) as e:
                raise self._failure("create", e) from e

    async def update(self, record_id: str, partial: Dict[str, Any]) -> T:
        changes = serialize_fields(partial)
        # ids are immutable
        changes.pop("id", None)

        with with_correlation(table=self.table, operation="update", entity_id=record_id):
            try:
                rows = await self.client.update(self.table, record_id, changes)
                if not rows:
                    raise StoreApiError("no row returned", 404)
                return parse_row(self.model, rows[0])
            except (StoreApiError, RecordValidationError) as e:
                raise self._failure("update", e) from e

    async def delete(self, record_id: str) -> None:
        with with_correlation(table=self.table, operation="delete", entity_id=record_id):
            try:
                await self.client.delete(self.table, record_id)
            except StoreApiError as e:
                raise self._failure("delete", e) from e


def build_repositories(client: SupabaseRestClient) -> Dict[str, TableRepository]:
    """One repository per remote table, keyed by table name."""
    return {
        table: TableRepository(client, table, model)
        for table, model in RECORD_TYPES.items()
    }
