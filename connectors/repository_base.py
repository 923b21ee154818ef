"""Abstract Repository Interface.

This module defines the interface every table repository implements. It is
intentionally store-agnostic - no PostgREST or Supabase specifics here.

Repositories:
1. List every row of a table, or rows matching column filters
2. Insert a draft and return the canonical row
3. Update a row by id with a partial record and return the canonical row
4. Delete a row by id

Key Design Principles:
- All methods return NORMALIZED record models (Task, LivestockRecord, etc.)
- Stores and controllers depend ONLY on this interface
- Every failure surfaces as RepositoryFailure: one attempt, no retries
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from core.models.records import RecordBase


T = TypeVar("T", bound=RecordBase)


class RepositoryFailure(Exception):
    """A remote call failed.

    Attributes:
        message: Human-readable description suitable for a notification
        cause: The original exception, if any
        table: Table the call targeted
        operation: list, create, update or delete
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        table: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.table = table
        self.operation = operation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "cause": repr(self.cause) if self.cause else None,
            "table": self.table,
            "operation": self.operation,
        }


class Repository(ABC, Generic[T]):
    """Abstract base class for table repositories.

    Implementations:
    - connectors/supabase/table_repository.py (hosted PostgREST store)
    - connectors/memory.py (seeded in-memory store for demo mode and tests)
    """

    def __init__(self, table: str, model: Type[T]):
        self.table = table
        self.model = model

    @abstractmethod
    async def list(self) -> List[T]:
        """Select every row of the table, in store order."""

    @abstractmethod
    async def list_where(
        self,
        column: str,
        equals: Optional[Any] = None,
        gte: Optional[Any] = None,
        lte: Optional[Any] = None,
    ) -> List[T]:
        """Select rows matching an equality filter and/or range filters on `column`."""

    @abstractmethod
    async def create(self, draft: Dict[str, Any]) -> T:
        """Insert one record and return the inserted row as canonical truth.

        A uuid is assigned when the draft carries no id.
        """

    @abstractmethod
    async def update(self, record_id: str, partial: Dict[str, Any]) -> T:
        """Apply a partial update to the row with `record_id` and return it."""

    @abstractmethod
    async def delete(self, record_id: str) -> None:
        """Delete the row with `record_id`."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.table}>"
