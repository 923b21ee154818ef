"""Entity stores.

`FarmStores` is built once by the application root and handed to every
controller, so all pages share the same collections and notifier.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from connectors.repository_base import Repository
from core.models.records import FeedInventoryItem, FeedingSchedule, HealthRecord, VaccinationSchedule
from stores.base import EntityStore, ReadOnlyStore
from stores.livestock import LivestockStore, UNKNOWN_ANIMAL
from stores.notifications import Notification, Notifier
from stores.reference import ReferenceStore
from stores.tasks import TaskStore
from stores.transactions import TransactionStore


@dataclass
class FarmStores:
    """One instance of every store plus the shared notifier."""
    livestock: LivestockStore
    tasks: TaskStore
    transactions: TransactionStore
    health_records: ReferenceStore[HealthRecord]
    vaccinations: ReferenceStore[VaccinationSchedule]
    feeding_schedules: ReferenceStore[FeedingSchedule]
    feed_inventory: ReferenceStore[FeedInventoryItem]
    notifier: Notifier = field(default_factory=Notifier)

    @classmethod
    def from_repositories(
        cls,
        repositories: Dict[str, Repository],
        notifier: Optional[Notifier] = None,
    ) -> "FarmStores":
        """Wire stores to repositories keyed by table name."""
        notifier = notifier or Notifier()
        return cls(
            livestock=LivestockStore(repositories["livestock"], notifier),
            tasks=TaskStore(repositories["tasks"], notifier),
            transactions=TransactionStore(repositories["financial_transactions"], notifier),
            health_records=ReferenceStore(repositories["health_records"], notifier),
            vaccinations=ReferenceStore(
                repositories["vaccination_schedules"], notifier, label="vaccination schedules"
            ),
            feeding_schedules=ReferenceStore(repositories["feeding_schedules"], notifier),
            feed_inventory=ReferenceStore(repositories["feed_inventory"], notifier),
            notifier=notifier,
        )


__all__ = [
    "FarmStores",
    "EntityStore",
    "ReadOnlyStore",
    "LivestockStore",
    "TaskStore",
    "TransactionStore",
    "ReferenceStore",
    "Notification",
    "Notifier",
    "UNKNOWN_ANIMAL",
]
