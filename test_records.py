"""
Record and Form Model Tests

Validates the repository boundary and client-side validation:
1. Loosely typed rows normalize into closed enums, Decimals and YYYY-MM-DD dates
2. Unknown enum values fall back to defaults with a logged warning
3. Unparseable rows raise RecordValidationError
4. Forms reject invalid input per field before anything is sent
"""

import logging
from datetime import date
from decimal import Decimal

import pytest

from core.models.records import (
    FinancialTransaction,
    HealthStatus,
    LivestockRecord,
    RECORD_TYPES,
    RecordValidationError,
    Task,
    TaskCategory,
    TaskPriority,
    TransactionStatus,
    is_income_category,
    parse_row,
    parse_rows,
    serialize_fields,
    signed_amount,
    to_decimal,
)
from core.models.forms import FormValidationError, LivestockForm, TaskForm, TransactionForm
from connectors.seed_data import SEED_ROWS, get_seed_rows


# =============================================================================
# Value parsing
# =============================================================================

class TestValueParsing:

    @pytest.mark.parametrize("raw,expected", [
        ("$1,200", Decimal("1200")),
        ("(350.00)", Decimal("-350.00")),
        (-120.5, Decimal("-120.5")),
        (300, Decimal("300")),
        ("", None),
        (None, None),
    ])
    def test_to_decimal(self, raw, expected):
        assert to_decimal(raw) == expected

    def test_to_decimal_rejects_garbage(self):
        with pytest.raises(ValueError):
            to_decimal("twelve")

    def test_income_categories(self):
        assert is_income_category("Sales")
        assert is_income_category(" income ")
        assert not is_income_category("Feed")
        assert not is_income_category(None)

    def test_signed_amount_follows_category(self):
        assert signed_amount("Sales", "-300") == Decimal("300")
        assert signed_amount("Feed", "120.50") == Decimal("-120.50")
        assert signed_amount("Labor", -10) == Decimal("-10")


# =============================================================================
# Boundary normalization
# =============================================================================

class TestParseRow:

    def test_enum_values_ignore_case_and_whitespace(self):
        task = parse_row(Task, {
            "id": "T1", "title": "Feed calves", "category": " FEEDING ",
            "priority": "High", "due_date": "2024-01-01",
        })
        assert task.category == TaskCategory.FEEDING
        assert task.priority == TaskPriority.HIGH
        assert task.completed is False

    def test_unknown_enum_defaults_and_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            animal = parse_row(LivestockRecord, {
                "id": "LV9", "name": "Ghost", "breed": "Angus", "gender": "Male",
                "health_status": "zombie",
            })
        assert animal.health_status == HealthStatus.HEALTHY
        assert any("zombie" in r.getMessage() for r in caplog.records)

    def test_transaction_status_defaults_to_pending(self):
        tx = parse_row(FinancialTransaction, {
            "id": "F1", "description": "x", "amount": "-5", "category": "Feed",
            "date": "2024-02-03", "status": None,
        })
        assert tx.status == TransactionStatus.PENDING

    def test_dates_normalize_to_iso_strings(self):
        tx = parse_row(FinancialTransaction, {
            "id": "F1", "description": "x", "amount": 10, "category": "Sales",
            "date": "03/15/2024",
        })
        assert tx.date == "2024-03-15"

        task = parse_row(Task, {
            "id": "T1", "title": "abc", "due_date": "2024-01-05T10:00:00+00:00",
        })
        assert task.due_date == "2024-01-05"

    def test_missing_required_field_raises(self):
        with pytest.raises(RecordValidationError) as exc_info:
            parse_row(Task, {"id": "T1", "due_date": "2024-01-01"})
        assert exc_info.value.table == "tasks"
        assert exc_info.value.row_id == "T1"
        assert "title" in str(exc_info.value)

    def test_records_are_frozen(self):
        task = parse_row(Task, {"id": "T1", "title": "abc", "due_date": "2024-01-01"})
        with pytest.raises(Exception):
            task.completed = True

    def test_amount_serializes_as_number(self):
        tx = parse_row(FinancialTransaction, {
            "id": "F1", "description": "x", "amount": "-120.50", "category": "Feed",
            "date": "2024-01-01",
        })
        assert tx.amount == Decimal("-120.50")
        assert tx.to_row()["amount"] == -120.5
        assert not tx.is_income

    def test_every_seed_table_parses(self):
        for table, rows in SEED_ROWS.items():
            records = parse_rows(RECORD_TYPES[table], get_seed_rows(table))
            assert len(records) == len(rows)

    def test_serialize_fields(self):
        out = serialize_fields({
            "category": TaskCategory.HEALTH,
            "amount": Decimal("1.5"),
            "due_date": date(2024, 1, 2),
            "title": "x",
        })
        assert out == {"category": "health", "amount": 1.5, "due_date": "2024-01-02", "title": "x"}


# =============================================================================
# Forms
# =============================================================================

class TestTaskForm:

    def test_valid_form_builds_pending_draft(self):
        form = TaskForm.parse({
            "title": "  Fix fence  ", "category": "General", "priority": "high",
            "due_date": "2024-05-01", "assignee": "",
        })
        draft = form.to_draft()
        assert draft["title"] == "Fix fence"
        assert draft["category"] == "general"
        assert draft["due_date"] == "2024-05-01"
        assert draft["completed"] is False
        assert draft["assignee"] is None

    def test_short_title_and_missing_date(self):
        with pytest.raises(FormValidationError) as exc_info:
            TaskForm.parse({"title": "ab"})
        errors = exc_info.value.errors
        assert errors["title"] == "Title must be at least 3 characters."
        assert errors["due_date"] == "A due date is required."

    def test_unknown_category(self):
        with pytest.raises(FormValidationError) as exc_info:
            TaskForm.parse({"title": "abc", "category": "fishing", "due_date": "2024-05-01"})
        assert "category" in exc_info.value.errors

    def test_update_leaves_completion_alone(self):
        form = TaskForm.parse({"title": "abc", "due_date": "2024-05-01"})
        assert "completed" not in form.to_update()


class TestTransactionForm:

    def test_expense_is_signed_negative(self):
        form = TransactionForm.parse({
            "description": "Hay", "amount": "120.50", "category": "feed",
        })
        draft = form.to_draft()
        assert draft["amount"] == Decimal("-120.50")
        assert draft["category"] == "Feed"
        assert draft["payment_method"] == "Bank Transfer"
        assert draft["status"] == "completed"
        assert draft["date"] == date.today().isoformat()

    def test_income_is_signed_positive(self):
        form = TransactionForm.parse({
            "description": "Milk", "amount": "-300", "category": "Sales", "date": "2024-01-10",
        })
        assert form.to_draft()["amount"] == Decimal("300")

    def test_required_fields(self):
        with pytest.raises(FormValidationError) as exc_info:
            TransactionForm.parse({"description": " ", "category": "Bitcoin", "payment_method": "IOU"})
        errors = exc_info.value.errors
        assert set(errors) == {"description", "amount", "category", "payment_method"}

    def test_zero_amount_rejected(self):
        with pytest.raises(FormValidationError) as exc_info:
            TransactionForm.parse({"description": "x", "amount": 0, "category": "Feed"})
        assert exc_info.value.errors["amount"] == "Amount must not be zero."


class TestLivestockForm:

    def test_required_fields(self):
        with pytest.raises(FormValidationError) as exc_info:
            LivestockForm.parse({"name": "Bella"})
        assert set(exc_info.value.errors) == {"breed", "gender"}

    def test_draft_is_json_ready(self):
        form = LivestockForm.parse({
            "name": "Bella", "breed": "Angus", "gender": "Female",
            "health_status": "Attention", "birth_date": "2021-03-15", "notes": "",
        })
        draft = form.to_draft()
        assert draft["health_status"] == "attention"
        assert draft["birth_date"] == "2021-03-15"
        assert draft["notes"] is None
