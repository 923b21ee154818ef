"""Entity stores - local collections kept in sync with a repository.

A store owns the in-memory collection for one table plus its loading and
error state. Failures from the repository are recovered here: the error is
recorded, logged and surfaced as a notification, and the collection keeps
its last-known-good content. No failure propagates out of a store.

Mutations are pessimistic: the collection changes only after the remote
store confirms, using the canonical record it returns.
"""

from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional

from connectors.repository_base import Repository, RepositoryFailure, T
from core.observability.logging import get_logger, with_correlation
from stores.notifications import Notifier

logger = get_logger(__name__)


class ReadOnlyStore(Generic[T]):
    """Loads a table into `items` and tracks loading/error state."""

    label = "records"

    def __init__(self, repository: Repository[T], notifier: Optional[Notifier] = None):
        self.repository = repository
        self.notifier = notifier or Notifier()
        self.items: List[T] = []
        self.is_loading = False
        self.last_error: Optional[RepositoryFailure] = None
        self._load_generation = 0
        self._loads_in_flight = 0

    @property
    def table(self) -> str:
        return self.repository.table

    def get(self, record_id: str) -> Optional[T]:
        for item in self.items:
            if item.id == record_id:
                return item
        return None

    async def load(self) -> bool:
        """Replace `items` with every row of the table.

        Returns:
            True if the collection was replaced
        """
        return await self._load(self.repository.list)

    async def _load(self, fetch: Callable[[], Awaitable[List[T]]]) -> bool:
        self._load_generation += 1
        generation = self._load_generation
        self._loads_in_flight += 1
        self.is_loading = True

        try:
            with with_correlation(table=self.table, operation="load"):
                logger.debug(f"Loading {self.label} (generation {generation})")
                try:
                    items = await fetch()
                except RepositoryFailure as e:
                    if generation != self._load_generation:
                        logger.debug(f"Ignoring failure of superseded {self.label} load {generation}")
                        return False
                    self._record_failure(e, f"Failed to load {self.label}")
                    return False

                if generation != self._load_generation:
                    logger.debug(
                        f"Discarding stale {self.label} load {generation}; "
                        f"newest is {self._load_generation}"
                    )
                    return False

                self.items = list(items)
                self.last_error = None
                logger.info(f"Loaded {len(self.items)} {self.label}")
                return True
        finally:
            self._loads_in_flight -= 1
            self.is_loading = self._loads_in_flight > 0

    def _record_failure(self, error: RepositoryFailure, summary: str) -> None:
        self.last_error = error
        logger.error(
            f"{summary}: {error.message}",
            extra_fields={"table": self.table, "failed_operation": error.operation},
        )
        self.notifier.push(summary, error.message, variant="destructive")


class EntityStore(ReadOnlyStore[T]):
    """A store that also creates, updates and deletes records."""

    _FAILED = object()

    def __init__(self, repository: Repository[T], notifier: Optional[Notifier] = None):
        super().__init__(repository, notifier)
        self.is_submitting = False
        self._submits_in_flight = 0

    def _index_of(self, record_id: str) -> Optional[int]:
        for i, item in enumerate(self.items):
            if item.id == record_id:
                return i
        return None

    async def _submit(self, operation: str, entity_id: Optional[str], call: Callable[[], Awaitable[Any]]):
        """Run one mutation with submitting state and correlation.

        Failures are recorded under the same correlation as the call.

        Returns:
            The call's result, or `_FAILED`
        """
        self._submits_in_flight += 1
        self.is_submitting = True
        try:
            with with_correlation(table=self.table, operation=operation, entity_id=entity_id):
                logger.debug(f"Submitting {operation} on {self.label}")
                try:
                    return await call()
                except RepositoryFailure as e:
                    self._record_failure(e, f"Failed to {operation} {self.label}")
                    return self._FAILED
        finally:
            self._submits_in_flight -= 1
            self.is_submitting = self._submits_in_flight > 0

    async def create(self, draft: Dict[str, Any]) -> Optional[T]:
        """Insert a new record and append the confirmed row.

        Returns:
            The canonical record, or None on failure
        """
        record = await self._submit("create", draft.get("id"), lambda: self.repository.create(draft))
        if record is self._FAILED:
            return None

        self.items.append(record)
        logger.info(f"Created {record.id} in {self.label}")
        return record

    async def update(self, record_id: str, partial: Dict[str, Any]) -> Optional[T]:
        """Apply a partial update and replace the local element in place.

        Returns:
            The canonical record, or None on failure
        """
        record = await self._submit("update", record_id, lambda: self.repository.update(record_id, partial))
        if record is self._FAILED:
            return None

        index = self._index_of(record_id)
        if index is None:
            logger.warning(f"Updated {record_id} is not in local {self.label}; collection unchanged")
        else:
            self.items[index] = record
        return record

    async def delete(self, record_id: str) -> bool:
        """Delete a record and drop it from the collection.

        Returns:
            True if the remote store confirmed the delete
        """
        result = await self._submit("delete", record_id, lambda: self.repository.delete(record_id))
        if result is self._FAILED:
            return False

        index = self._index_of(record_id)
        if index is not None:
            del self.items[index]
        logger.info(f"Deleted {record_id} from {self.label}")
        return True
