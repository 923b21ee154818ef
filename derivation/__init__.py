"""Pure filters and aggregates over farm records."""

from derivation.engine import (
    ALL,
    MONTHS,
    CategoryTotals,
    FinancialSummary,
    LivestockFilter,
    MonthlyBucket,
    TaskFilter,
    TaskSummary,
    TransactionFilter,
    VaccinationOutlook,
    breed_distribution,
    category_totals,
    count_due_today,
    count_overdue,
    filter_feeding_schedules,
    filter_livestock,
    filter_tasks,
    filter_transactions,
    financial_summary,
    health_distribution,
    is_past_due,
    matches_text,
    monthly_buckets,
    task_summary,
    upcoming_vaccinations,
)

__all__ = [
    "ALL",
    "MONTHS",
    "CategoryTotals",
    "FinancialSummary",
    "LivestockFilter",
    "MonthlyBucket",
    "TaskFilter",
    "TaskSummary",
    "TransactionFilter",
    "VaccinationOutlook",
    "breed_distribution",
    "category_totals",
    "count_due_today",
    "count_overdue",
    "filter_feeding_schedules",
    "filter_livestock",
    "filter_tasks",
    "filter_transactions",
    "financial_summary",
    "health_distribution",
    "is_past_due",
    "matches_text",
    "monthly_buckets",
    "task_summary",
    "upcoming_vaccinations",
]
