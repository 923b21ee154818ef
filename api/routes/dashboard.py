"""Dashboard endpoint."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_dashboard_controller
from controllers import DashboardController
from models.api_responses import DashboardOverviewResponse


router = APIRouter()


@router.get("", response_model=DashboardOverviewResponse)
async def get_overview(
    today: Optional[date] = Query(None, description="Override today's date"),
    controller: DashboardController = Depends(get_dashboard_controller),
) -> DashboardOverviewResponse:
    """Metric cards, task status pie and breed pie for the farm."""
    if not await controller.mount():
        stores = controller.stores
        failed = [s for s in (stores.livestock, stores.tasks, stores.transactions) if s.last_error]
        message = "; ".join(s.last_error.message for s in failed) or "Remote store request failed"
        raise HTTPException(status_code=502, detail=message)
    return controller.overview(today)
