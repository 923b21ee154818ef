"""Load-only stores for display-only reference tables."""

from typing import Optional

from connectors.repository_base import Repository, T
from stores.base import ReadOnlyStore
from stores.notifications import Notifier


class ReferenceStore(ReadOnlyStore[T]):
    """Feeding schedules, feed inventory, health records and vaccination schedules."""

    def __init__(
        self,
        repository: Repository[T],
        notifier: Optional[Notifier] = None,
        label: Optional[str] = None,
    ):
        super().__init__(repository, notifier)
        self.label = label or repository.table.replace("_", " ")
