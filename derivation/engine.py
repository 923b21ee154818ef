"""Filter/Derivation Engine.

Pure functions over record collections: filtered views and aggregates for
the tasks, livestock, finances, health and feeding pages. Nothing here does
I/O or mutates its input.

Date comparisons use the `YYYY-MM-DD` strings directly; records are already
normalized to that form at the repository boundary.
"""

from __future__ import annotations

import math
from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, field_validator

from core.models.records import (
    DateString,
    FeedingSchedule,
    FinancialTransaction,
    HealthStatus,
    LivestockRecord,
    Task,
    TaskCategory,
    TaskPriority,
    TransactionStatus,
    VaccinationSchedule,
)

ALL = "all"
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
TASK_STATUSES = (ALL, "completed", "pending")

Today = Union[date, str]


def _today_string(today: Today) -> str:
    return today.isoformat() if isinstance(today, date) else today


def _choice(value: Optional[str], allowed: Iterable[str], name: str) -> str:
    key = (value or ALL).strip().lower()
    if key not in allowed:
        raise ValueError(f"Unknown {name} filter: {value!r}")
    return key


# =============================================================================
# Free-text search
# =============================================================================

def matches_text(record: BaseModel, query: Optional[str], fields: Sequence[str]) -> bool:
    """Case-insensitive substring match of `query` against any of `fields`.

    An empty or missing query matches everything.
    """
    if query is None or not query.strip():
        return True
    needle = query.strip().lower()
    for name in fields:
        value = getattr(record, name, None)
        if value is None:
            continue
        if hasattr(value, "value"):
            value = value.value
        if needle in str(value).lower():
            return True
    return False


# =============================================================================
# Filter specifications
# =============================================================================

class FilterSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    search: Optional[str] = None


class TaskFilter(FilterSpec):
    """Task list filter. Every dimension set to "all"/None is inactive."""
    status: str = ALL
    category: str = ALL
    priority: str = ALL
    due_date: Optional[DateString] = None

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        return _choice(value, TASK_STATUSES, "status")

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value):
        return _choice(getattr(value, "value", value), [ALL] + [c.value for c in TaskCategory], "category")

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, value):
        return _choice(getattr(value, "value", value), [ALL] + [p.value for p in TaskPriority], "priority")


class TransactionFilter(FilterSpec):
    category: str = ALL
    status: str = ALL

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value):
        return (value or ALL).strip()

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        return _choice(getattr(value, "value", value), [ALL] + [s.value for s in TransactionStatus], "status")


class LivestockFilter(FilterSpec):
    health_status: str = ALL

    @field_validator("health_status", mode="before")
    @classmethod
    def _health(cls, value):
        return _choice(getattr(value, "value", value), [ALL] + [h.value for h in HealthStatus], "health status")


# =============================================================================
# Filters
# =============================================================================

TASK_SEARCH_FIELDS = ("title", "description")
TRANSACTION_SEARCH_FIELDS = ("description", "category")
LIVESTOCK_SEARCH_FIELDS = ("name", "breed", "id")
FEEDING_SEARCH_FIELDS = ("name", "feed_type", "animal_group")


def _task_matches(task: Task, spec: TaskFilter) -> bool:
    if spec.status == "completed" and not task.completed:
        return False
    if spec.status == "pending" and task.completed:
        return False
    if spec.category != ALL and task.category.value != spec.category:
        return False
    if spec.priority != ALL and task.priority.value != spec.priority:
        return False
    if spec.due_date and task.due_date != spec.due_date:
        return False
    return matches_text(task, spec.search, TASK_SEARCH_FIELDS)


def filter_tasks(tasks: Iterable[Task], spec: Optional[TaskFilter] = None) -> List[Task]:
    """Ordered subsequence of `tasks` satisfying every active predicate."""
    spec = spec or TaskFilter()
    return [t for t in tasks if _task_matches(t, spec)]


def filter_transactions(
    transactions: Iterable[FinancialTransaction],
    spec: Optional[TransactionFilter] = None,
) -> List[FinancialTransaction]:
    spec = spec or TransactionFilter()
    category = spec.category.lower()
    result = []
    for tx in transactions:
        if category != ALL and tx.category.lower() != category:
            continue
        if spec.status != ALL and tx.status.value != spec.status:
            continue
        if not matches_text(tx, spec.search, TRANSACTION_SEARCH_FIELDS):
            continue
        result.append(tx)
    return result


def filter_livestock(
    animals: Iterable[LivestockRecord],
    spec: Optional[LivestockFilter] = None,
) -> List[LivestockRecord]:
    spec = spec or LivestockFilter()
    return [
        a for a in animals
        if (spec.health_status == ALL or a.health_status.value == spec.health_status)
        and matches_text(a, spec.search, LIVESTOCK_SEARCH_FIELDS)
    ]


def filter_feeding_schedules(
    schedules: Iterable[FeedingSchedule],
    search: Optional[str] = None,
) -> List[FeedingSchedule]:
    return [s for s in schedules if matches_text(s, search, FEEDING_SEARCH_FIELDS)]


# =============================================================================
# Finance derivations
# =============================================================================

class CategoryTotals(BaseModel):
    """Absolute amounts per category, split into income and expense.

    Both mappings are ordered by total descending, then category name.
    """
    income: Dict[str, Decimal]
    expense: Dict[str, Decimal]


class MonthlyBucket(BaseModel):
    month: str
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")


class FinancialSummary(BaseModel):
    total_income: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    pending_income: Decimal
    pending_expenses: Decimal
    transaction_count: int


def _ranked(totals: Dict[str, Decimal]) -> Dict[str, Decimal]:
    return dict(sorted(totals.items(), key=lambda kv: (-kv[1], kv[0])))


def category_totals(transactions: Iterable[FinancialTransaction]) -> CategoryTotals:
    """Sum of absolute amounts grouped by category, split by sign.

    Zero amounts are counted as expenses.
    """
    income: Dict[str, Decimal] = {}
    expense: Dict[str, Decimal] = {}
    for tx in transactions:
        bucket = income if tx.amount > 0 else expense
        bucket[tx.category] = bucket.get(tx.category, Decimal("0")) + abs(tx.amount)
    return CategoryTotals(income=_ranked(income), expense=_ranked(expense))


def monthly_buckets(transactions: Iterable[FinancialTransaction]) -> List[MonthlyBucket]:
    """Twelve month slots (Jan..Dec) of income and expense sums.

    Years are not distinguished: each transaction lands in the slot of its
    calendar month.
    """
    income = [Decimal("0")] * 12
    expense = [Decimal("0")] * 12
    for tx in transactions:
        month = int(tx.date[5:7]) - 1
        if tx.amount > 0:
            income[month] += tx.amount
        else:
            expense[month] += abs(tx.amount)
    return [
        MonthlyBucket(month=name, income=income[i], expense=expense[i])
        for i, name in enumerate(MONTHS)
    ]


def financial_summary(transactions: Iterable[FinancialTransaction]) -> FinancialSummary:
    """Totals over completed transactions plus outstanding pending amounts."""
    totals = {
        (TransactionStatus.COMPLETED, True): Decimal("0"),
        (TransactionStatus.COMPLETED, False): Decimal("0"),
        (TransactionStatus.PENDING, True): Decimal("0"),
        (TransactionStatus.PENDING, False): Decimal("0"),
    }
    count = 0
    for tx in transactions:
        totals[(tx.status, tx.amount > 0)] += abs(tx.amount)
        count += 1

    income = totals[(TransactionStatus.COMPLETED, True)]
    expenses = totals[(TransactionStatus.COMPLETED, False)]
    return FinancialSummary(
        total_income=income,
        total_expenses=expenses,
        net_profit=income - expenses,
        pending_income=totals[(TransactionStatus.PENDING, True)],
        pending_expenses=totals[(TransactionStatus.PENDING, False)],
        transaction_count=count,
    )


# =============================================================================
# Task derivations
# =============================================================================

class TaskSummary(BaseModel):
    total: int
    completed: int
    pending: int
    high_priority: int
    due_today: int
    overdue: int
    completion_percent: int


def is_past_due(task: Task, today: Today) -> bool:
    """A pending task whose due date is before today."""
    return not task.completed and task.due_date < _today_string(today)


def count_due_today(tasks: Iterable[Task], today: Today) -> int:
    """Pending tasks due on `today`."""
    day = _today_string(today)
    return sum(1 for t in tasks if not t.completed and t.due_date == day)


def count_overdue(tasks: Iterable[Task], today: Today) -> int:
    day = _today_string(today)
    return sum(1 for t in tasks if is_past_due(t, day))


def task_summary(tasks: Iterable[Task], today: Today) -> TaskSummary:
    tasks = list(tasks)
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)
    percent = math.floor(completed * 100 / total + 0.5) if total else 0
    return TaskSummary(
        total=total,
        completed=completed,
        pending=total - completed,
        high_priority=sum(1 for t in tasks if t.priority == TaskPriority.HIGH),
        due_today=count_due_today(tasks, today),
        overdue=count_overdue(tasks, today),
        completion_percent=percent,
    )


# =============================================================================
# Livestock and health derivations
# =============================================================================

def health_distribution(animals: Iterable[LivestockRecord]) -> Dict[str, int]:
    """Animal count per health status; every status is present."""
    counts = {status.value: 0 for status in HealthStatus}
    for animal in animals:
        counts[animal.health_status.value] += 1
    return counts


def breed_distribution(animals: Iterable[LivestockRecord]) -> Dict[str, int]:
    """Animal count per breed, ordered by count descending then breed."""
    counts = Counter(a.breed for a in animals)
    return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))


class VaccinationOutlook(BaseModel):
    upcoming: List[VaccinationSchedule]
    overdue: List[VaccinationSchedule]


def upcoming_vaccinations(schedules: Iterable[VaccinationSchedule], today: Today) -> VaccinationOutlook:
    """Split schedules by due date: before today is overdue.

    Both lists are ordered by due date, soonest first.
    """
    day = _today_string(today)
    ordered = sorted(schedules, key=lambda s: (s.due_date, s.id))
    return VaccinationOutlook(
        upcoming=[s for s in ordered if s.due_date >= day],
        overdue=[s for s in ordered if s.due_date < day],
    )
