"""API Routes Package."""

from api.routes import health, tasks, livestock, finances, records, dashboard, notifications

__all__ = [
    "health",
    "tasks",
    "livestock",
    "finances",
    "records",
    "dashboard",
    "notifications",
]
