"""Livestock page controller."""

from typing import Any, Dict, List, Optional

from controllers.base import ModalState, PageController
from core.models.forms import LivestockForm
from core.models.records import LivestockRecord
from core.observability.logging import get_logger
from derivation.engine import LivestockFilter, breed_distribution, filter_livestock, health_distribution
from models.api_responses import LivestockCard, LivestockStatsResponse, breed_slices, health_slices

logger = get_logger(__name__)

VIEW_MODES = ("grid", "table")


class LivestockController(PageController):
    page = "livestock"

    def __init__(self, stores):
        super().__init__(stores)
        self.view_mode = "grid"
        self.filter = LivestockFilter()
        self.modal = ModalState()
        self.selected_id: Optional[str] = None

    @property
    def store(self):
        return self.stores.livestock

    async def mount(self) -> bool:
        with self.correlation():
            return await self.store.load()

    def set_view(self, mode: str) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode: {mode!r}")
        self.view_mode = mode

    def set_filter(self, **changes) -> LivestockFilter:
        self.filter = LivestockFilter(**{**self.filter.model_dump(), **changes})
        return self.filter

    def visible(self) -> List[LivestockRecord]:
        return filter_livestock(self.store.items, self.filter)

    def cards(self) -> List[LivestockCard]:
        return [LivestockCard.from_record(r) for r in self.visible()]

    def open_detail(self, animal_id: str) -> Optional[LivestockRecord]:
        animal = self.store.get(animal_id)
        self.selected_id = animal.id if animal else None
        return animal

    def close_detail(self) -> None:
        self.selected_id = None

    @property
    def selected(self) -> Optional[LivestockRecord]:
        return self.store.get(self.selected_id) if self.selected_id else None

    def open_create(self) -> None:
        self.modal.open_create()

    def open_edit(self, animal_id: str) -> Optional[LivestockRecord]:
        animal = self.store.get(animal_id)
        if animal is not None:
            self.modal.open_edit(animal_id)
        return animal

    def close_modal(self) -> None:
        self.modal.close()

    async def submit(self, form_data: Dict[str, Any], animal_id: Optional[str] = None) -> Optional[LivestockRecord]:
        """Validate and save the livestock form.

        Raises:
            FormValidationError: The form is invalid; nothing was sent
        """
        form = LivestockForm.parse(form_data)
        target = animal_id or self.modal.editing_id

        with self.correlation(entity_id=target):
            if target:
                animal = await self.store.update(target, form.to_draft())
                title = "Livestock Updated"
            else:
                animal = await self.store.create(form.to_draft())
                title = "Livestock Added"

        if animal is None:
            return None
        self.modal.close()
        self.notify(title, f"{animal.name} ({animal.id}) has been saved.")
        return animal

    async def delete(self, animal_id: str) -> bool:
        with self.correlation(entity_id=animal_id):
            deleted = await self.store.delete(animal_id)
        if deleted:
            if self.selected_id == animal_id:
                self.selected_id = None
            self.notify("Livestock Deleted", f"Livestock {animal_id} has been deleted")
        return deleted

    def stats(self) -> LivestockStatsResponse:
        animals = self.store.items
        return LivestockStatsResponse(
            total=len(animals),
            health=health_slices(health_distribution(animals)),
            breeds=breed_slices(breed_distribution(animals)),
        )

    # PDF output is not produced; these only acknowledge the request.

    def export(self, animal_id: Optional[str] = None) -> None:
        if animal_id:
            self.notify("Export PDF", f"Exporting details for {animal_id} as PDF", variant="info")
        else:
            self.notify("Export All Records", "Exporting all livestock records as PDF", variant="info")
        logger.info(f"Export requested for {animal_id or 'all livestock'}")

    def print_record(self, animal_id: Optional[str] = None) -> None:
        if animal_id:
            self.notify("Print Record", f"Printing record for {animal_id}", variant="info")
        else:
            self.notify("Print All Records", "Printing all livestock records", variant="info")

    def generate_report(self) -> None:
        self.notify("Generate Report", "Generating comprehensive livestock report", variant="info")
