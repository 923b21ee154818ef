"""Dashboard page controller."""

import asyncio
from datetime import date
from decimal import Decimal
from typing import Optional

from controllers.base import PageController
from derivation.engine import breed_distribution, financial_summary, health_distribution, task_summary
from models.api_responses import (
    TASK_STATUS_COLORS,
    ChartSlice,
    DashboardOverviewResponse,
    MetricCard,
    TaskCard,
    breed_slices,
    format_money,
)

UPCOMING_TASK_LIMIT = 5


class DashboardController(PageController):
    page = "dashboard"

    async def mount(self) -> bool:
        with self.correlation():
            results = await asyncio.gather(
                self.stores.livestock.load(),
                self.stores.tasks.load(),
                self.stores.transactions.load(),
            )
        return all(results)

    def monthly_feed_cost(self, today: Optional[date] = None) -> Decimal:
        """Feed spending in the calendar month of `today`."""
        month = self.today(today).isoformat()[:7]
        return sum(
            (abs(tx.amount) for tx in self.stores.transactions.items
             if tx.category.lower() == "feed" and tx.amount < 0 and tx.date[:7] == month),
            Decimal("0"),
        )

    def overview(self, today: Optional[date] = None) -> DashboardOverviewResponse:
        today = self.today(today)
        animals = self.stores.livestock.items
        tasks = self.stores.tasks.items

        health = health_distribution(animals)
        tasks_info = task_summary(tasks, today)
        finances = financial_summary(self.stores.transactions.items)

        metrics = [
            MetricCard(title="Total Livestock", value=len(animals), color="primary"),
            MetricCard(title="Health Alerts", value=health["attention"] + health["sick"], color="secondary"),
            MetricCard(title="Pending Tasks", value=tasks_info.pending, color="accent"),
            MetricCard(title="Due Today", value=tasks_info.due_today, color="accent"),
            MetricCard(title="Overdue Tasks", value=tasks_info.overdue, color="secondary"),
            MetricCard(title="Feed Cost (Monthly)", value=format_money(self.monthly_feed_cost(today)), color="muted"),
            MetricCard(title="Net Profit", value=format_money(finances.net_profit), color="primary"),
        ]

        task_status = [
            ChartSlice(name="Pending", value=tasks_info.pending, color=TASK_STATUS_COLORS["Pending"]),
            ChartSlice(name="Completed", value=tasks_info.completed, color=TASK_STATUS_COLORS["Completed"]),
        ]

        pending = sorted((t for t in tasks if not t.completed), key=lambda t: (t.due_date, t.id))
        livestock = self.stores.livestock
        upcoming = [
            TaskCard.from_task(t, today, livestock.name_for(t.animal_id))
            for t in pending[:UPCOMING_TASK_LIMIT]
        ]

        return DashboardOverviewResponse(
            metrics=metrics,
            task_status=task_status,
            breeds=breed_slices(breed_distribution(animals)),
            upcoming_tasks=upcoming,
        )
