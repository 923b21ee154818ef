"""Finances page controller."""

from typing import Any, Dict, List, Optional

from controllers.base import ModalState, PageController
from core.models.forms import TransactionForm
from core.models.records import FinancialTransaction
from derivation.engine import (
    TransactionFilter,
    category_totals,
    filter_transactions,
    financial_summary,
    monthly_buckets,
)
from models.api_responses import FinanceSummaryResponse, FinancialAnalyticsResponse, TransactionRow, format_money


class FinancesController(PageController):
    page = "finances"

    def __init__(self, stores):
        super().__init__(stores)
        self.filter = TransactionFilter()
        self.modal = ModalState()

    @property
    def store(self):
        return self.stores.transactions

    async def mount(self) -> bool:
        with self.correlation():
            return await self.store.load()

    def set_filter(self, **changes) -> TransactionFilter:
        self.filter = TransactionFilter(**{**self.filter.model_dump(), **changes})
        return self.filter

    def visible(self) -> List[FinancialTransaction]:
        return filter_transactions(self.store.items, self.filter)

    def rows(self) -> List[TransactionRow]:
        return [TransactionRow.from_transaction(tx) for tx in self.visible()]

    def open_create(self) -> None:
        self.modal.open_create()

    def close_modal(self) -> None:
        self.modal.close()

    async def submit(self, form_data: Dict[str, Any]) -> Optional[FinancialTransaction]:
        """Validate and record a new transaction, signed by its category.

        Raises:
            FormValidationError: The form is invalid; nothing was sent
        """
        form = TransactionForm.parse(form_data)
        with self.correlation():
            tx = await self.store.create(form.to_draft())
        if tx is None:
            return None
        self.modal.close()
        self.notify("Transaction added", f"{tx.description}: {format_money(tx.amount)}")
        return tx

    async def delete(self, transaction_id: str) -> bool:
        with self.correlation(entity_id=transaction_id):
            deleted = await self.store.delete(transaction_id)
        if deleted:
            self.notify("Transaction deleted", f"Transaction {transaction_id} has been deleted.")
        return deleted

    def summary(self) -> FinanceSummaryResponse:
        return FinanceSummaryResponse.from_summary(financial_summary(self.store.items))

    def analytics(self) -> FinancialAnalyticsResponse:
        items = self.store.items
        return FinancialAnalyticsResponse.build(monthly_buckets(items), category_totals(items))

    def export(self) -> None:
        self.notify("Export Financial Data", "Exporting data to CSV/Excel.", variant="info")
