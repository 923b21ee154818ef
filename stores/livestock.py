"""Livestock store."""

from typing import Optional

from core.models.records import LivestockRecord
from stores.base import EntityStore

UNKNOWN_ANIMAL = "Unknown"


class LivestockStore(EntityStore[LivestockRecord]):
    label = "livestock"

    def name_for(self, animal_id: Optional[str]) -> str:
        """Display name of an animal; "Unknown" for missing or dangling ids."""
        if not animal_id:
            return UNKNOWN_ANIMAL
        animal = self.get(animal_id)
        return animal.name if animal else UNKNOWN_ANIMAL
