"""Models Package.

Presentational models for the farm dashboard API: task cards, livestock
cards, transaction rows, chart series and metric cards.
"""

from models.api_responses import (
    ChartSlice,
    DashboardOverviewResponse,
    ErrorResponse,
    FeedingResponse,
    FinanceSummaryResponse,
    FinancialAnalyticsResponse,
    HealthRecordRow,
    InventoryResponse,
    LivestockCard,
    LivestockListResponse,
    LivestockStatsResponse,
    MetricCard,
    MonthlyBarPoint,
    NotificationView,
    TaskCard,
    TaskListResponse,
    TransactionRow,
    VaccinationResponse,
    format_money,
)

__all__ = [
    "ChartSlice",
    "DashboardOverviewResponse",
    "ErrorResponse",
    "FeedingResponse",
    "FinanceSummaryResponse",
    "FinancialAnalyticsResponse",
    "HealthRecordRow",
    "InventoryResponse",
    "LivestockCard",
    "LivestockListResponse",
    "LivestockStatsResponse",
    "MetricCard",
    "MonthlyBarPoint",
    "NotificationView",
    "TaskCard",
    "TaskListResponse",
    "TransactionRow",
    "VaccinationResponse",
    "format_money",
]
