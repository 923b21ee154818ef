"""Task board endpoints."""

from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Response

from api.dependencies import apply_filter, ensure_loaded, get_tasks_controller, remote_failure
from controllers import TasksController
from derivation.engine import TaskSummary
from models.api_responses import TaskCard, TaskListResponse


router = APIRouter()


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    status: Optional[str] = Query(None, description="all, completed or pending"),
    category: Optional[str] = Query(None, description="all or a task category"),
    priority: Optional[str] = Query(None, description="all, low, medium or high"),
    due_date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    search: Optional[str] = Query(None, description="Text in title or description"),
    today: Optional[date] = Query(None, description="Override today's date"),
    controller: TasksController = Depends(get_tasks_controller),
) -> TaskListResponse:
    """Filtered task cards plus the board summary."""
    apply_filter(controller, status=status, category=category, priority=priority, due_date=due_date, search=search)
    if not await controller.mount():
        raise remote_failure(controller.store)
    return TaskListResponse(tasks=controller.cards(today), summary=controller.summary(today))


@router.get("/summary", response_model=TaskSummary)
async def get_task_summary(
    today: Optional[date] = Query(None),
    controller: TasksController = Depends(get_tasks_controller),
) -> TaskSummary:
    if not await controller.mount():
        raise remote_failure(controller.store)
    return controller.summary(today)


@router.post("", response_model=TaskCard, status_code=201)
async def create_task(
    form_data: Dict[str, Any] = Body(...),
    controller: TasksController = Depends(get_tasks_controller),
) -> TaskCard:
    controller.open_create()
    task = await controller.submit(form_data)
    if task is None:
        raise remote_failure(controller.store)
    return await controller.card(task)


@router.patch("/{task_id}", response_model=TaskCard)
async def update_task(
    task_id: str,
    form_data: Dict[str, Any] = Body(...),
    controller: TasksController = Depends(get_tasks_controller),
) -> TaskCard:
    current = await ensure_loaded(controller.store, task_id)
    controller.open_edit(task_id)
    # Edits submit the whole form; unspecified fields keep their current values
    merged = {**current.model_dump(mode="json"), **form_data}
    task = await controller.submit(merged)
    if task is None:
        raise remote_failure(controller.store)
    return await controller.card(task)


@router.post("/{task_id}/toggle", response_model=TaskCard)
async def toggle_task(
    task_id: str,
    controller: TasksController = Depends(get_tasks_controller),
) -> TaskCard:
    await ensure_loaded(controller.store, task_id)
    task = await controller.toggle(task_id)
    if task is None:
        raise remote_failure(controller.store)
    return await controller.card(task)


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    controller: TasksController = Depends(get_tasks_controller),
) -> Response:
    await ensure_loaded(controller.store, task_id)
    if not await controller.delete(task_id):
        raise remote_failure(controller.store)
    return Response(status_code=204)
