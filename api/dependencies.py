"""Request-scoped dependencies shared by the routers.

Stores live on `app.state` for the whole process; controllers are cheap and
built per request, since their UI state does not outlive a request here.
"""

from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request
from pydantic import ValidationError

from controllers import (
    DashboardController,
    FeedingController,
    FinancesController,
    HealthController,
    LivestockController,
    TasksController,
)
from stores import FarmStores
from stores.base import ReadOnlyStore


def get_stores(request: Request) -> FarmStores:
    return request.app.state.stores


def get_tasks_controller(stores: FarmStores = Depends(get_stores)) -> TasksController:
    return TasksController(stores)


def get_livestock_controller(stores: FarmStores = Depends(get_stores)) -> LivestockController:
    return LivestockController(stores)


def get_finances_controller(stores: FarmStores = Depends(get_stores)) -> FinancesController:
    return FinancesController(stores)


def get_health_controller(stores: FarmStores = Depends(get_stores)) -> HealthController:
    return HealthController(stores)


def get_feeding_controller(stores: FarmStores = Depends(get_stores)) -> FeedingController:
    return FeedingController(stores)


def get_dashboard_controller(stores: FarmStores = Depends(get_stores)) -> DashboardController:
    return DashboardController(stores)


# =============================================================================
# HELPERS
# =============================================================================

def remote_failure(store: ReadOnlyStore) -> HTTPException:
    """502 carrying the store's last recorded failure."""
    message = store.last_error.message if store.last_error else "Remote store request failed"
    return HTTPException(status_code=502, detail=message)


def apply_filter(controller: Any, **changes: Optional[str]) -> None:
    """Set a controller filter from query parameters; bad options are a 422."""
    try:
        controller.set_filter(**{k: v for k, v in changes.items() if v is not None})
    except ValidationError as e:
        errors: Dict[str, str] = {}
        for err in e.errors():
            field = str(err["loc"][0]) if err.get("loc") else "filter"
            errors.setdefault(field, err.get("msg", "Invalid value").replace("Value error, ", ""))
        raise HTTPException(status_code=422, detail={"message": "Invalid filter", "errors": errors})


async def ensure_loaded(store: ReadOnlyStore, record_id: str):
    """Local record by id, loading the store once if it is missing.

    Raises:
        HTTPException: 502 if the load fails, 404 if the id is unknown
    """
    record = store.get(record_id)
    if record is None:
        if not await store.load():
            raise remote_failure(store)
        record = store.get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"{record_id} not found in {store.label}")
    return record
