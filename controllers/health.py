"""Health page controller."""

import asyncio
from datetime import date
from typing import List, Optional

from controllers.base import PageController
from derivation.engine import upcoming_vaccinations
from models.api_responses import HealthRecordRow, VaccinationResponse


class HealthController(PageController):
    page = "health"

    async def mount(self) -> bool:
        """Load health records, vaccination schedules and the herd together."""
        with self.correlation():
            results = await asyncio.gather(
                self.stores.health_records.load(),
                self.stores.vaccinations.load(),
                self.stores.livestock.load(),
            )
        return all(results)

    def records(self) -> List[HealthRecordRow]:
        """Health records, newest first, with animal names from the herd."""
        livestock = self.stores.livestock
        rows = []
        for record in sorted(self.stores.health_records.items, key=lambda r: r.date, reverse=True):
            rows.append(HealthRecordRow(
                id=record.id,
                animal_id=record.animal_id,
                animal_name=livestock.name_for(record.animal_id),
                type=record.type,
                date=record.date,
                description=record.description,
                performed_by=record.performed_by,
            ))
        return rows

    def vaccinations(self, today: Optional[date] = None) -> VaccinationResponse:
        outlook = upcoming_vaccinations(self.stores.vaccinations.items, self.today(today))
        return VaccinationResponse(upcoming=outlook.upcoming, overdue=outlook.overdue)
