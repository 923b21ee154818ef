"""Read-only reference records: health, vaccinations, feeding and inventory."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_feeding_controller, get_health_controller, remote_failure
from controllers import FeedingController, HealthController
from models.api_responses import FeedingResponse, HealthRecordRow, InventoryResponse, VaccinationResponse


router = APIRouter()


def _first_failed(*stores):
    for store in stores:
        if store.last_error is not None:
            return store
    return stores[0]


@router.get("/health", response_model=List[HealthRecordRow])
async def health_records(
    controller: HealthController = Depends(get_health_controller),
) -> List[HealthRecordRow]:
    if not await controller.mount():
        stores = controller.stores
        raise remote_failure(_first_failed(stores.health_records, stores.vaccinations, stores.livestock))
    return controller.records()


@router.get("/vaccinations", response_model=VaccinationResponse)
async def vaccinations(
    today: Optional[date] = Query(None),
    controller: HealthController = Depends(get_health_controller),
) -> VaccinationResponse:
    if not await controller.stores.vaccinations.load():
        raise remote_failure(controller.stores.vaccinations)
    return controller.vaccinations(today)


@router.get("/feeding", response_model=FeedingResponse)
async def feeding_schedules(
    search: Optional[str] = Query(None, description="Text in name, feed type or animal group"),
    controller: FeedingController = Depends(get_feeding_controller),
) -> FeedingResponse:
    controller.set_search(search)
    if not await controller.stores.feeding_schedules.load():
        raise remote_failure(controller.stores.feeding_schedules)
    return FeedingResponse(schedules=controller.schedules())


@router.get("/inventory", response_model=InventoryResponse)
async def feed_inventory(
    controller: FeedingController = Depends(get_feeding_controller),
) -> InventoryResponse:
    if not await controller.stores.feed_inventory.load():
        raise remote_failure(controller.stores.feed_inventory)
    return InventoryResponse(items=controller.inventory())
