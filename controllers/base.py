"""Shared page controller plumbing."""

from datetime import date
from typing import Optional

from core.observability.logging import with_correlation
from stores import FarmStores


class PageController:
    """Holds ephemeral UI state for one page.

    Controllers read store collections and call store operations; they never
    assign to a store's `items` themselves.
    """

    page = ""

    def __init__(self, stores: FarmStores):
        self.stores = stores

    @property
    def notifier(self):
        return self.stores.notifier

    def correlation(self, **kwargs):
        return with_correlation(page=self.page, **kwargs)

    def notify(self, title: str, description: str = "", variant: str = "default") -> None:
        self.notifier.push(title, description, variant)

    @staticmethod
    def today(today: Optional[date] = None) -> date:
        return today or date.today()


class ModalState:
    """Create/edit modal: closed, open for a new record, or open on one id."""

    def __init__(self):
        self.is_open = False
        self.editing_id: Optional[str] = None

    def open_create(self) -> None:
        self.is_open = True
        self.editing_id = None

    def open_edit(self, record_id: str) -> None:
        self.is_open = True
        self.editing_id = record_id

    def close(self) -> None:
        self.is_open = False
        self.editing_id = None
