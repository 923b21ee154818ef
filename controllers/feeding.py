"""Feeding page controller."""

import asyncio
from typing import List, Optional

from controllers.base import PageController
from core.models.records import FeedInventoryItem, FeedingSchedule
from derivation.engine import filter_feeding_schedules


class FeedingController(PageController):
    page = "feeding"

    def __init__(self, stores):
        super().__init__(stores)
        self.search: Optional[str] = None

    async def mount(self) -> bool:
        with self.correlation():
            results = await asyncio.gather(
                self.stores.feeding_schedules.load(),
                self.stores.feed_inventory.load(),
            )
        return all(results)

    def set_search(self, text: Optional[str]) -> None:
        self.search = text or None

    def schedules(self) -> List[FeedingSchedule]:
        return filter_feeding_schedules(self.stores.feeding_schedules.items, self.search)

    def inventory(self) -> List[FeedInventoryItem]:
        return list(self.stores.feed_inventory.items)
