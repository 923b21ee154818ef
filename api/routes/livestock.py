"""Herd endpoints."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response

from api.dependencies import apply_filter, ensure_loaded, get_livestock_controller, remote_failure
from controllers import LivestockController
from models.api_responses import LivestockCard, LivestockListResponse, LivestockStatsResponse, NotificationView


router = APIRouter()


@router.get("", response_model=LivestockListResponse)
async def list_livestock(
    health_status: Optional[str] = Query(None, description="all, healthy, attention or sick"),
    search: Optional[str] = Query(None, description="Text in name, breed or id"),
    view: str = Query("grid", description="grid or table"),
    controller: LivestockController = Depends(get_livestock_controller),
) -> LivestockListResponse:
    try:
        controller.set_view(view)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    apply_filter(controller, health_status=health_status, search=search)
    if not await controller.mount():
        raise remote_failure(controller.store)
    return LivestockListResponse(view=controller.view_mode, animals=controller.cards())


@router.get("/stats", response_model=LivestockStatsResponse)
async def livestock_stats(
    controller: LivestockController = Depends(get_livestock_controller),
) -> LivestockStatsResponse:
    if not await controller.mount():
        raise remote_failure(controller.store)
    return controller.stats()


@router.post("/export", response_model=NotificationView)
async def export_livestock(
    animal_id: Optional[str] = Query(None),
    controller: LivestockController = Depends(get_livestock_controller),
) -> NotificationView:
    """Acknowledge an export request. No file is produced."""
    controller.export(animal_id)
    return NotificationView(**controller.notifier.latest().to_dict())


@router.get("/{animal_id}", response_model=LivestockCard)
async def get_livestock(
    animal_id: str,
    controller: LivestockController = Depends(get_livestock_controller),
) -> LivestockCard:
    await ensure_loaded(controller.store, animal_id)
    return LivestockCard.from_record(controller.open_detail(animal_id))


@router.post("", response_model=LivestockCard, status_code=201)
async def create_livestock(
    form_data: Dict[str, Any] = Body(...),
    controller: LivestockController = Depends(get_livestock_controller),
) -> LivestockCard:
    controller.open_create()
    animal = await controller.submit(form_data)
    if animal is None:
        raise remote_failure(controller.store)
    return LivestockCard.from_record(animal)


@router.patch("/{animal_id}", response_model=LivestockCard)
async def update_livestock(
    animal_id: str,
    form_data: Dict[str, Any] = Body(...),
    controller: LivestockController = Depends(get_livestock_controller),
) -> LivestockCard:
    current = await ensure_loaded(controller.store, animal_id)
    controller.open_edit(animal_id)
    merged = {**current.model_dump(mode="json"), **form_data}
    animal = await controller.submit(merged)
    if animal is None:
        raise remote_failure(controller.store)
    return LivestockCard.from_record(animal)


@router.delete("/{animal_id}", status_code=204)
async def delete_livestock(
    animal_id: str,
    controller: LivestockController = Depends(get_livestock_controller),
) -> Response:
    await ensure_loaded(controller.store, animal_id)
    if not await controller.delete(animal_id):
        raise remote_failure(controller.store)
    return Response(status_code=204)
