"""Financial transaction endpoints."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response

from api.dependencies import apply_filter, ensure_loaded, get_finances_controller, remote_failure
from controllers import FinancesController
from models.api_responses import FinanceSummaryResponse, FinancialAnalyticsResponse, TransactionRow


router = APIRouter()


@router.get("/transactions", response_model=List[TransactionRow])
async def list_transactions(
    category: Optional[str] = Query(None, description="all or a transaction category"),
    status: Optional[str] = Query(None, description="all, completed or pending"),
    search: Optional[str] = Query(None, description="Text in description or category"),
    controller: FinancesController = Depends(get_finances_controller),
) -> List[TransactionRow]:
    apply_filter(controller, category=category, status=status, search=search)
    if not await controller.mount():
        raise remote_failure(controller.store)
    return controller.rows()


@router.post("/transactions", response_model=TransactionRow, status_code=201)
async def create_transaction(
    form_data: Dict[str, Any] = Body(...),
    controller: FinancesController = Depends(get_finances_controller),
) -> TransactionRow:
    controller.open_create()
    tx = await controller.submit(form_data)
    if tx is None:
        raise remote_failure(controller.store)
    return TransactionRow.from_transaction(tx)


@router.delete("/transactions/{transaction_id}", status_code=204)
async def delete_transaction(
    transaction_id: str,
    controller: FinancesController = Depends(get_finances_controller),
) -> Response:
    await ensure_loaded(controller.store, transaction_id)
    if not await controller.delete(transaction_id):
        raise remote_failure(controller.store)
    return Response(status_code=204)


@router.get("/summary", response_model=FinanceSummaryResponse)
async def get_summary(
    controller: FinancesController = Depends(get_finances_controller),
) -> FinanceSummaryResponse:
    if not await controller.mount():
        raise remote_failure(controller.store)
    return controller.summary()


@router.get("/analytics", response_model=FinancialAnalyticsResponse)
async def get_analytics(
    controller: FinancesController = Depends(get_finances_controller),
) -> FinancialAnalyticsResponse:
    """Monthly income/expense bars and per-category pies."""
    if not await controller.mount():
        raise remote_failure(controller.store)
    return controller.analytics()
