"""Core data models - storage-neutral farm records and form models.

This package contains the canonical record models that are intentionally
independent of the remote store, plus the client-side form validators.
"""

from core.models.records import (
    # Base
    RecordBase,
    DecimalValue,
    DateString,
    RecordValidationError,
    parse_row,
    parse_rows,
    serialize_fields,

    # Enums
    HealthStatus,
    TaskCategory,
    TaskPriority,
    TransactionStatus,
    INCOME_CATEGORIES,
    EXPENSE_CATEGORIES,
    TRANSACTION_CATEGORIES,
    PAYMENT_METHODS,
    is_income_category,
    signed_amount,

    # Entities
    LivestockRecord,
    Task,
    FinancialTransaction,
    FeedingSchedule,
    FeedInventoryItem,
    HealthRecord,
    VaccinationSchedule,
    RECORD_TYPES,
)

from core.models.forms import (
    FormValidationError,
    TaskForm,
    TransactionForm,
    LivestockForm,
)

__all__ = [
    "RecordBase",
    "DecimalValue",
    "DateString",
    "RecordValidationError",
    "parse_row",
    "parse_rows",
    "serialize_fields",
    "HealthStatus",
    "TaskCategory",
    "TaskPriority",
    "TransactionStatus",
    "INCOME_CATEGORIES",
    "EXPENSE_CATEGORIES",
    "TRANSACTION_CATEGORIES",
    "PAYMENT_METHODS",
    "is_income_category",
    "signed_amount",
    "LivestockRecord",
    "Task",
    "FinancialTransaction",
    "FeedingSchedule",
    "FeedInventoryItem",
    "HealthRecord",
    "VaccinationSchedule",
    "RECORD_TYPES",
    "FormValidationError",
    "TaskForm",
    "TransactionForm",
    "LivestockForm",
]
