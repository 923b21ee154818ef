"""Tasks page controller."""

import asyncio
from datetime import date
from typing import Any, Dict, List, Optional

from controllers.base import ModalState, PageController
from core.models.forms import TaskForm
from core.models.records import Task
from core.observability.logging import get_logger
from derivation.engine import TaskFilter, TaskSummary, filter_tasks, task_summary
from models.api_responses import TaskCard

logger = get_logger(__name__)


class TasksController(PageController):
    page = "tasks"

    def __init__(self, stores):
        super().__init__(stores)
        self.filter = TaskFilter()
        self.modal = ModalState()

    @property
    def store(self):
        return self.stores.tasks

    async def mount(self) -> bool:
        """Load tasks, plus the herd the first time so cards can show animal names.

        Only the task load decides success; a failed herd load leaves names
        as "Unknown".
        """
        with self.correlation():
            if self.stores.livestock.items:
                return await self.store.load()
            loaded, _ = await asyncio.gather(self.store.load(), self.stores.livestock.load())
            return loaded

    def set_filter(self, **changes) -> TaskFilter:
        """Merge filter changes; raises ValueError for unknown options."""
        self.filter = TaskFilter(**{**self.filter.model_dump(), **changes})
        return self.filter

    def visible(self) -> List[Task]:
        return filter_tasks(self.store.items, self.filter)

    def cards(self, today: Optional[date] = None) -> List[TaskCard]:
        today = self.today(today)
        livestock = self.stores.livestock
        return [
            TaskCard.from_task(task, today, livestock.name_for(task.animal_id))
            for task in self.visible()
        ]

    async def card(self, task: Task, today: Optional[date] = None) -> TaskCard:
        """Card for a single task, loading the herd if the animal is not known yet."""
        livestock = self.stores.livestock
        if task.animal_id and not livestock.items:
            await livestock.load()
        return TaskCard.from_task(task, self.today(today), livestock.name_for(task.animal_id))

    def summary(self, today: Optional[date] = None) -> TaskSummary:
        return task_summary(self.store.items, self.today(today))

    def open_create(self) -> None:
        self.modal.open_create()

    def open_edit(self, task_id: str) -> Optional[Task]:
        task = self.store.get(task_id)
        if task is not None:
            self.modal.open_edit(task_id)
        return task

    def close_modal(self) -> None:
        self.modal.close()

    async def submit(self, form_data: Dict[str, Any], task_id: Optional[str] = None) -> Optional[Task]:
        """Validate and save the task form.

        Args:
            form_data: Raw form fields
            task_id: Task to edit; defaults to the one open in the modal

        Returns:
            The saved task, or None if the remote call failed

        Raises:
            FormValidationError: The form is invalid; nothing was sent
        """
        form = TaskForm.parse(form_data)
        target = task_id or self.modal.editing_id

        with self.correlation(entity_id=target):
            if target:
                task = await self.store.update(target, form.to_update())
                title, description = "Task updated", f'"{form.title}" has been updated.'
            else:
                task = await self.store.create(form.to_draft())
                title, description = "Task created", f'"{form.title}" has been added.'

        if task is None:
            return None
        self.modal.close()
        self.notify(title, description)
        return task

    async def toggle(self, task_id: str) -> Optional[Task]:
        with self.correlation(entity_id=task_id):
            return await self.store.toggle_completion(task_id)

    async def delete(self, task_id: str) -> bool:
        with self.correlation(entity_id=task_id):
            deleted = await self.store.delete(task_id)
        if deleted:
            logger.info(f"Task {task_id} deleted")
            self.notify("Task deleted", f"Task {task_id} has been deleted.")
        return deleted
