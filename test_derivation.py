"""
Filter/Derivation Engine Tests

Pure functions only; no stores or repositories involved.
"""

import random
from decimal import Decimal

import pytest
from pydantic import ValidationError

from connectors.seed_data import get_seed_rows
from core.models.records import (
    FeedingSchedule,
    FinancialTransaction,
    LivestockRecord,
    Task,
    VaccinationSchedule,
    parse_row,
    parse_rows,
)
from derivation import (
    MONTHS,
    LivestockFilter,
    TaskFilter,
    TransactionFilter,
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


def task(id, priority="medium", completed=False, due="2024-01-01", **extra):
    return parse_row(Task, {
        "id": id, "title": extra.pop("title", f"Task {id}"), "priority": priority,
        "completed": completed, "due_date": due, **extra,
    })


def tx(id, category, amount, date="2024-01-15", status="completed", description=None):
    return parse_row(FinancialTransaction, {
        "id": id, "category": category, "amount": amount, "date": date, "status": status,
        "description": description or f"{category} {id}",
    })


@pytest.fixture
def seed_tasks():
    return parse_rows(Task, get_seed_rows("tasks"))


@pytest.fixture
def seed_transactions():
    return parse_rows(FinancialTransaction, get_seed_rows("financial_transactions"))


@pytest.fixture
def seed_livestock():
    return parse_rows(LivestockRecord, get_seed_rows("livestock"))


# =============================================================================
# Filters
# =============================================================================

class TestTaskFilter:

    def test_pending_scenario(self):
        t1 = task("T1", priority="high", completed=False, due="2024-01-01")
        t2 = task("T2", priority="low", completed=True, due="2024-01-02")
        assert filter_tasks([t1, t2], TaskFilter(status="pending")) == [t1]

    def test_all_filter_is_identity(self, seed_tasks):
        spec = TaskFilter(status="all", category="all", priority="all")
        assert filter_tasks(seed_tasks, spec) == seed_tasks
        assert filter_tasks(seed_tasks) == seed_tasks

    @pytest.mark.parametrize("spec", [
        TaskFilter(status="pending"),
        TaskFilter(status="completed", category="health"),
        TaskFilter(priority="high", search="VACC"),
        TaskFilter(due_date="2023-11-15"),
    ])
    def test_filter_is_idempotent(self, seed_tasks, spec):
        once = filter_tasks(seed_tasks, spec)
        assert filter_tasks(once, spec) == once

    def test_predicates_combine_with_and(self, seed_tasks):
        result = filter_tasks(seed_tasks, TaskFilter(category="health", status="pending"))
        assert [t.id for t in result] == ["T002"]

    def test_search_covers_description(self, seed_tasks):
        result = filter_tasks(seed_tasks, TaskFilter(search="pasture"))
        assert [t.id for t in result] == ["T004"]

    def test_due_date_accepts_date_forms(self, seed_tasks):
        result = filter_tasks(seed_tasks, TaskFilter(due_date="11/10/2023"))
        assert [t.id for t in result] == ["T003"]

    def test_unknown_option_rejected(self):
        with pytest.raises(ValidationError):
            TaskFilter(status="done")
        with pytest.raises(ValidationError):
            TaskFilter(priority="urgent")


class TestOtherFilters:

    def test_transaction_category_is_case_insensitive(self, seed_transactions):
        result = filter_transactions(seed_transactions, TransactionFilter(category="sales"))
        assert [t.id for t in result] == ["F002", "F004"]

    def test_transaction_status_and_search(self, seed_transactions):
        assert [t.id for t in filter_transactions(seed_transactions, TransactionFilter(status="pending"))] == ["F007"]
        assert [t.id for t in filter_transactions(seed_transactions, TransactionFilter(search="dr."))] == ["F003"]

    def test_livestock_filter(self, seed_livestock):
        sick = filter_livestock(seed_livestock, LivestockFilter(health_status="sick"))
        assert [a.name for a in sick] == ["Rosie"]
        by_id = filter_livestock(seed_livestock, LivestockFilter(search="lv1002"))
        assert [a.name for a in by_id] == ["Duke"]
        assert filter_livestock(seed_livestock) == seed_livestock

    def test_feeding_search(self):
        schedules = parse_rows(FeedingSchedule, get_seed_rows("feeding_schedules"))
        assert [s.id for s in filter_feeding_schedules(schedules, "dairy")] == ["FS001", "FS002"]
        assert [s.id for s in filter_feeding_schedules(schedules, "silage")] == ["FS002"]
        assert filter_feeding_schedules(schedules, "  ") == schedules

    def test_matches_text_skips_missing_fields(self):
        t = task("T1", title="Feed calves")
        assert matches_text(t, "CALVES", ("description", "title"))
        assert not matches_text(t, "fence", ("description", "title"))
        assert matches_text(t, None, ("title",))


# =============================================================================
# Finance derivations
# =============================================================================

class TestCategoryTotals:

    def test_scenario(self):
        totals = category_totals([tx("1", "Feed", "-120.50"), tx("2", "Sales", 300)])
        assert totals.expense == {"Feed": Decimal("120.50")}
        assert totals.income == {"Sales": Decimal("300")}

    def test_ordering_with_ties(self):
        totals = category_totals([
            tx("1", "Medical", -50), tx("2", "Equipment", -50), tx("3", "Feed", -80),
        ])
        assert list(totals.expense) == ["Feed", "Equipment", "Medical"]

    def test_zero_amount_counts_as_expense(self):
        totals = category_totals([tx("1", "Other", 0)])
        assert totals.expense == {"Other": Decimal("0")}
        assert totals.income == {}

    def test_order_independent(self, seed_transactions):
        shuffled = list(seed_transactions)
        random.Random(7).shuffle(shuffled)
        assert category_totals(shuffled) == category_totals(seed_transactions)


class TestMonthlyBuckets:

    def test_twelve_slots(self):
        buckets = monthly_buckets([])
        assert [b.month for b in buckets] == list(MONTHS)
        assert all(b.income == 0 and b.expense == 0 for b in buckets)

    def test_each_transaction_lands_in_its_month(self):
        buckets = monthly_buckets([
            tx("1", "Sales", 100, date="2024-03-01"),
            tx("2", "Feed", -40, date="2023-03-31"),
            tx("3", "Feed", -10, date="2024-12-05"),
        ])
        assert buckets[2].income == Decimal("100")
        assert buckets[2].expense == Decimal("40")
        assert buckets[11].expense == Decimal("10")

    def test_sums_are_conservative(self, seed_transactions):
        buckets = monthly_buckets(seed_transactions)
        total = sum(b.income + b.expense for b in buckets)
        assert total == sum(abs(t.amount) for t in seed_transactions)


def test_financial_summary(seed_transactions):
    summary = financial_summary(seed_transactions)
    assert summary.total_income == Decimal("6000")
    assert summary.total_expenses == Decimal("2570")
    assert summary.net_profit == Decimal("3430")
    assert summary.pending_expenses == Decimal("1800")
    assert summary.pending_income == Decimal("0")
    assert summary.transaction_count == 7


# =============================================================================
# Task derivations
# =============================================================================

class TestTaskDerivations:

    def test_due_today_and_overdue(self, seed_tasks):
        today = "2023-11-18"
        # T005 is due today but already completed
        assert count_due_today(seed_tasks, today) == 0
        assert count_overdue(seed_tasks, today) == 2
        assert count_due_today(seed_tasks, "2023-11-20") == 1

    def test_is_past_due(self):
        assert is_past_due(task("T1", due="2024-01-01"), "2024-01-02")
        assert not is_past_due(task("T1", due="2024-01-02"), "2024-01-02")
        assert not is_past_due(task("T1", due="2024-01-01", completed=True), "2024-01-02")

    def test_summary(self, seed_tasks):
        summary = task_summary(seed_tasks, "2023-11-18")
        assert summary.total == 5
        assert summary.completed == 1
        assert summary.pending == 4
        assert summary.high_priority == 3
        assert summary.overdue == 2
        assert summary.completion_percent == 20

    def test_summary_of_nothing(self):
        summary = task_summary([], "2024-01-01")
        assert summary.total == 0
        assert summary.completion_percent == 0

    def test_completion_rounds_half_up(self):
        tasks = [task(str(i), completed=i < 1) for i in range(8)]
        # 1/8 = 12.5%
        assert task_summary(tasks, "2024-01-01").completion_percent == 13


# =============================================================================
# Livestock and health derivations
# =============================================================================

def test_health_distribution_has_every_status(seed_livestock):
    assert health_distribution(seed_livestock) == {"healthy": 4, "attention": 1, "sick": 1}
    assert health_distribution([]) == {"healthy": 0, "attention": 0, "sick": 0}


def test_breed_distribution_orders_by_count_then_name(seed_livestock):
    extra = parse_row(LivestockRecord, {"id": "LV2000", "name": "Max", "breed": "Jersey", "gender": "Male"})
    distribution = breed_distribution(seed_livestock + [extra])
    assert list(distribution.items())[0] == ("Jersey", 2)
    assert list(distribution)[1:] == ["Angus", "Brahman", "Charolais", "Hereford", "Holstein"]


def test_upcoming_vaccinations():
    schedules = parse_rows(VaccinationSchedule, get_seed_rows("vaccination_schedules"))
    outlook = upcoming_vaccinations(schedules, "2023-11-20")
    assert [s.id for s in outlook.upcoming] == ["VS002", "VS001"]
    assert [s.id for s in outlook.overdue] == ["VS003"]
