"""Task store."""

from datetime import date
from typing import Optional, Union

from connectors.repository_base import RepositoryFailure
from core.models.records import Task
from stores.base import EntityStore


class TaskStore(EntityStore[Task]):
    label = "tasks"

    async def toggle_completion(self, task_id: str, value: Optional[bool] = None) -> Optional[Task]:
        """Set the completed flag, touching no other field.

        Args:
            task_id: Task to update
            value: New flag; defaults to the negation of the local value
        """
        if value is None:
            current = self.get(task_id)
            if current is None:
                failure = RepositoryFailure(
                    f"Task {task_id!r} is not loaded",
                    table=self.table,
                    operation="update",
                )
                self._record_failure(failure, "Failed to update task")
                return None
            value = not current.completed
        return await self.update(task_id, {"completed": value})

    async def load_due_on(self, due_date: Union[date, str]) -> bool:
        """Replace `items` with the tasks due on one day."""
        if isinstance(due_date, date):
            due_date = due_date.isoformat()
        return await self._load(lambda: self.repository.list_where("due_date", equals=due_date))
