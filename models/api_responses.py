"""
API Response Models for the farm dashboard.

These Pydantic models are the presentational contract between the backend
API and the browser front-end: records are turned into display-ready cards,
rows and chart series here, so the front-end only renders.

Hierarchy:
- TaskCard / TaskListResponse: task board with past-due flags and labels
- LivestockCard / LivestockStatsResponse: herd grid/table and charts
- TransactionRow / FinanceSummaryResponse / FinancialAnalyticsResponse
- HealthRecordRow / VaccinationResponse: health page
- DashboardOverviewResponse: metric cards and pie charts
- NotificationView / ErrorResponse: toasts and error bodies
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.functional_serializers import PlainSerializer
from typing_extensions import Annotated

from core.models.records import (
    FeedingSchedule,
    FeedInventoryItem,
    FinancialTransaction,
    HealthStatus,
    LivestockRecord,
    Task,
    TaskCategory,
    VaccinationSchedule,
)
from derivation.engine import CategoryTotals, FinancialSummary, MonthlyBucket, TaskSummary, is_past_due


Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


# =============================================================================
# DISPLAY LOOKUPS
# =============================================================================

TASK_CATEGORY_LABELS: Dict[TaskCategory, str] = {
    TaskCategory.FEEDING: "Feeding",
    TaskCategory.HEALTH: "Health",
    TaskCategory.BREEDING: "Breeding",
    TaskCategory.GENERAL: "General",
}

TASK_CATEGORY_COLORS: Dict[TaskCategory, str] = {
    TaskCategory.FEEDING: "amber",
    TaskCategory.HEALTH: "red",
    TaskCategory.BREEDING: "purple",
    TaskCategory.GENERAL: "blue",
}

HEALTH_LABELS: Dict[HealthStatus, str] = {
    HealthStatus.HEALTHY: "Healthy",
    HealthStatus.ATTENTION: "Needs Attention",
    HealthStatus.SICK: "Sick",
}

HEALTH_COLORS: Dict[HealthStatus, str] = {
    HealthStatus.HEALTHY: "#10B981",
    HealthStatus.ATTENTION: "#F59E0B",
    HealthStatus.SICK: "#EF4444",
}

INCOME_COLORS = {"Sales": "#10B981", "Income": "#059669"}
EXPENSE_COLORS = {
    "Feed": "#F97316",
    "Medical": "#EF4444",
    "Labor": "#8B5CF6",
    "Equipment": "#6366F1",
    "Insurance": "#EC4899",
    "Utilities": "#F59E0B",
    "Other": "#94A3B8",
}
DEFAULT_INCOME_COLOR = "#0EA5E9"
DEFAULT_EXPENSE_COLOR = "#F43F5E"

BREED_PALETTE = ("#3B82F6", "#10B981", "#6366F1", "#F59E0B", "#94A3B8", "#EC4899", "#8B5CF6")

TASK_STATUS_COLORS = {"Pending": "#F59E0B", "Completed": "#10B981"}


def format_money(amount: Decimal) -> str:
    """Signed currency string, e.g. -$1,250.00."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


# =============================================================================
# BASE MODELS
# =============================================================================

class ResponseBase(BaseModel):
    """Base class for all API responses."""
    model_config = ConfigDict(populate_by_name=True)


class ChartSlice(ResponseBase):
    """One slice of a pie chart or one bar of a single-series chart."""
    name: str
    value: Union[int, Money]
    color: str = Field(default="#94A3B8", description="Hex fill color")


class MetricCard(ResponseBase):
    """Headline number on the dashboard."""
    title: str
    value: Union[int, str]
    color: str = Field(default="primary", description="Theme: primary, secondary, accent, muted")


# =============================================================================
# TASK MODELS
# =============================================================================

class TaskCard(ResponseBase):
    """A task as rendered on the task board."""
    id: str
    title: str
    description: Optional[str] = None
    category: TaskCategory
    category_label: str
    category_color: str
    priority: str
    due_date: str
    completed: bool
    past_due: bool = Field(..., description="Pending and due before today")
    assignee: Optional[str] = None
    animal_id: Optional[str] = None
    animal_name: Optional[str] = Field(default=None, description="Resolved name, 'Unknown' when dangling")

    @classmethod
    def from_task(cls, task: Task, today: date, animal_name: Optional[str] = None) -> "TaskCard":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            category=task.category,
            category_label=TASK_CATEGORY_LABELS[task.category],
            category_color=TASK_CATEGORY_COLORS[task.category],
            priority=task.priority.value,
            due_date=task.due_date,
            completed=task.completed,
            past_due=is_past_due(task, today),
            assignee=task.assignee,
            animal_id=task.animal_id,
            animal_name=animal_name if task.animal_id else None,
        )


class TaskListResponse(ResponseBase):
    tasks: List[TaskCard] = Field(default_factory=list)
    summary: TaskSummary


# =============================================================================
# LIVESTOCK MODELS
# =============================================================================

class LivestockCard(ResponseBase):
    """An animal as rendered in the grid, table or detail view."""
    id: str
    name: str
    breed: str
    gender: str
    age: Optional[str] = None
    weight: Optional[str] = None
    health_status: HealthStatus
    health_label: str
    image_url: Optional[str] = None
    birth_date: Optional[str] = None
    purchase_date: Optional[str] = None
    purchase_price: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_record(cls, record: LivestockRecord) -> "LivestockCard":
        data = record.model_dump(exclude={"created_at", "updated_at"})
        return cls(health_label=HEALTH_LABELS[record.health_status], **data)


class LivestockListResponse(ResponseBase):
    view: str = Field(..., description="grid or table")
    animals: List[LivestockCard] = Field(default_factory=list)


class LivestockStatsResponse(ResponseBase):
    total: int
    health: List[ChartSlice] = Field(default_factory=list)
    breeds: List[ChartSlice] = Field(default_factory=list)


def health_slices(distribution: Dict[str, int]) -> List[ChartSlice]:
    return [
        ChartSlice(name=HEALTH_LABELS[status], value=distribution.get(status.value, 0), color=HEALTH_COLORS[status])
        for status in HealthStatus
    ]


def breed_slices(distribution: Dict[str, int]) -> List[ChartSlice]:
    return [
        ChartSlice(name=breed, value=count, color=BREED_PALETTE[i % len(BREED_PALETTE)])
        for i, (breed, count) in enumerate(distribution.items())
    ]


# =============================================================================
# FINANCE MODELS
# =============================================================================

class TransactionRow(ResponseBase):
    id: str
    date: str
    description: str
    category: str
    amount: Money
    display_amount: str
    is_income: bool
    payment_method: Optional[str] = None
    status: str

    @classmethod
    def from_transaction(cls, tx: FinancialTransaction) -> "TransactionRow":
        return cls(
            id=tx.id,
            date=tx.date,
            description=tx.description,
            category=tx.category,
            amount=tx.amount,
            display_amount=format_money(tx.amount),
            is_income=tx.is_income,
            payment_method=tx.payment_method,
            status=tx.status.value,
        )


class FinanceSummaryResponse(ResponseBase):
    total_income: Money
    total_expenses: Money
    net_profit: Money
    pending_income: Money
    pending_expenses: Money
    transaction_count: int

    @classmethod
    def from_summary(cls, summary: FinancialSummary) -> "FinanceSummaryResponse":
        return cls(**summary.model_dump())


class MonthlyBarPoint(ResponseBase):
    name: str
    income: Money
    expenses: Money


class FinancialAnalyticsResponse(ResponseBase):
    monthly: List[MonthlyBarPoint] = Field(..., min_length=12, max_length=12)
    income_by_category: List[ChartSlice] = Field(default_factory=list)
    expenses_by_category: List[ChartSlice] = Field(default_factory=list)

    @classmethod
    def build(cls, buckets: List[MonthlyBucket], totals: CategoryTotals) -> "FinancialAnalyticsResponse":
        return cls(
            monthly=[MonthlyBarPoint(name=b.month, income=b.income, expenses=b.expense) for b in buckets],
            income_by_category=[
                ChartSlice(name=name, value=total, color=INCOME_COLORS.get(name, DEFAULT_INCOME_COLOR))
                for name, total in totals.income.items()
            ],
            expenses_by_category=[
                ChartSlice(name=name, value=total, color=EXPENSE_COLORS.get(name, DEFAULT_EXPENSE_COLOR))
                for name, total in totals.expense.items()
            ],
        )


# =============================================================================
# HEALTH AND FEEDING MODELS
# =============================================================================

class HealthRecordRow(ResponseBase):
    id: str
    animal_id: str
    animal_name: str
    type: str
    date: str
    description: Optional[str] = None
    performed_by: Optional[str] = None


class VaccinationResponse(ResponseBase):
    upcoming: List[VaccinationSchedule] = Field(default_factory=list)
    overdue: List[VaccinationSchedule] = Field(default_factory=list)


class FeedingResponse(ResponseBase):
    schedules: List[FeedingSchedule] = Field(default_factory=list)


class InventoryResponse(ResponseBase):
    items: List[FeedInventoryItem] = Field(default_factory=list)


# =============================================================================
# DASHBOARD MODELS
# =============================================================================

class DashboardOverviewResponse(ResponseBase):
    metrics: List[MetricCard] = Field(default_factory=list)
    task_status: List[ChartSlice] = Field(default_factory=list)
    breeds: List[ChartSlice] = Field(default_factory=list)
    upcoming_tasks: List[TaskCard] = Field(default_factory=list, max_length=5)


# =============================================================================
# NOTIFICATIONS AND ERRORS
# =============================================================================

class NotificationView(ResponseBase):
    id: str
    title: str
    description: str = ""
    variant: str = "default"
    created_at: str


class ErrorResponse(ResponseBase):
    message: str
    errors: Dict[str, str] = Field(default_factory=dict, description="field -> message for validation errors")
