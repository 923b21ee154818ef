"""Financial transaction store.

Every mutation re-derives the amount's sign from the category so that
income rows are positive and expense rows negative, whatever the caller
submitted.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Union

from connectors.repository_base import RepositoryFailure
from core.models.records import FinancialTransaction, signed_amount
from core.observability.logging import get_logger, with_correlation
from stores.base import EntityStore

logger = get_logger(__name__)


class TransactionStore(EntityStore[FinancialTransaction]):
    label = "financial transactions"

    def _signed(self, operation: str, record_id: Optional[str], category, amount) -> Optional[Decimal]:
        """`amount` with the sign of `category`; an unparseable amount is recorded as a failure."""
        try:
            return signed_amount(category, amount)
        except ValueError as e:
            with with_correlation(table=self.table, operation=operation, entity_id=record_id):
                failure = RepositoryFailure(str(e), cause=e, table=self.table, operation=operation)
                self._record_failure(failure, f"Failed to {operation} {self.label}")
            return None

    async def create(self, draft: Dict[str, Any]) -> Optional[FinancialTransaction]:
        draft = dict(draft)
        if draft.get("amount") is not None:
            amount = self._signed("create", draft.get("id"), draft.get("category"), draft["amount"])
            if amount is None:
                return None
            draft["amount"] = amount
        return await super().create(draft)

    async def update(self, record_id: str, partial: Dict[str, Any]) -> Optional[FinancialTransaction]:
        partial = dict(partial)
        if "amount" in partial or "category" in partial:
            current = self.get(record_id)
            category = partial.get("category", current.category if current else None)
            amount = partial.get("amount", current.amount if current else None)
            if category is None or amount is None:
                logger.warning(
                    f"Cannot re-sign amount of {record_id}: transaction is not loaded",
                    extra_fields={"entity_id": record_id},
                )
            else:
                signed = self._signed("update", record_id, category, amount)
                if signed is None:
                    return None
                partial["amount"] = signed
        return await super().update(record_id, partial)

    async def load_range(
        self,
        start: Union[date, str, None] = None,
        end: Union[date, str, None] = None,
    ) -> bool:
        """Replace `items` with the transactions dated within [start, end]."""
        start = start.isoformat() if isinstance(start, date) else start
        end = end.isoformat() if isinstance(end, date) else end
        return await self._load(lambda: self.repository.list_where("date", gte=start, lte=end))
