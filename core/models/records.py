"""Canonical farm record models - storage-neutral.

These models represent rows of the remote tables in a standardized form.
Rows coming back from the store are loosely typed (free-form strings for
enums, amounts and dates); parsing them through `parse_row` is the only place
untyped data is accepted. Everything past that boundary works with these
models.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, model_validator
from pydantic.functional_validators import BeforeValidator
from typing_extensions import Annotated

from core.observability.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# Enums
# =============================================================================

class HealthStatus(str, Enum):
    """Operator-set health status of an animal."""
    HEALTHY = "healthy"
    ATTENTION = "attention"
    SICK = "sick"


class TaskCategory(str, Enum):
    """Task categories."""
    FEEDING = "feeding"
    HEALTH = "health"
    BREEDING = "breeding"
    GENERAL = "general"


class TaskPriority(str, Enum):
    """Task priorities."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TransactionStatus(str, Enum):
    """Financial transaction settlement status."""
    COMPLETED = "completed"
    PENDING = "pending"


# Income categories carry a positive amount; every other category is an expense.
INCOME_CATEGORIES = ("Sales", "Income")
EXPENSE_CATEGORIES = ("Feed", "Medical", "Equipment", "Labor", "Insurance", "Utilities", "Other")
TRANSACTION_CATEGORIES = EXPENSE_CATEGORIES + INCOME_CATEGORIES

PAYMENT_METHODS = ("Bank Transfer", "Cash", "Credit Card", "Check", "Direct Debit")


def is_income_category(category: Optional[str]) -> bool:
    """Whether a transaction category is classified as income."""
    if not category:
        return False
    key = category.strip().lower()
    return any(key == c.lower() for c in INCOME_CATEGORIES)


def signed_amount(category: Optional[str], amount) -> Decimal:
    """Apply the income/expense sign of `category` to the magnitude of `amount`."""
    magnitude = abs(to_decimal(amount) or Decimal("0"))
    return magnitude if is_income_category(category) else -magnitude


# =============================================================================
# Value Parsers (handle loosely typed rows from the remote store)
# =============================================================================

def to_decimal(value) -> Optional[Decimal]:
    """Parse decimal from various formats (string with $ or commas, floats, etc.)."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Cannot parse amount: {value!r}")
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    if isinstance(value, str):
        s = value.strip()
        if s == "":
            return None
        s = s.replace("$", "").replace(",", "")
        if s.startswith("(") and s.endswith(")"):
            s = "-" + s[1:-1]
        try:
            return Decimal(s)
        except InvalidOperation:
            raise ValueError(f"Cannot parse amount: {value!r}")
    return value


def _parse_date_string(value):
    """Parse a date into its `YYYY-MM-DD` string form."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        s = value.strip()
        if s == "":
            return None
        # ISO datetimes from timestamp columns
        if len(s) > 10 and s[10] in ("T", " "):
            s = s[:10]
        for fmt in ("%Y-%m-%d", "%m/%d/%Y", "%m-%d-%Y"):
            try:
                return datetime.strptime(s, fmt).date().isoformat()
            except ValueError:
                continue
        raise ValueError(f"Cannot parse date: {value!r}")
    return value


DecimalValue = Annotated[Decimal, BeforeValidator(to_decimal)]
DateString = Annotated[str, BeforeValidator(_parse_date_string)]


def _normalize_enum(enum_cls: Type[Enum], value) -> Optional[Enum]:
    """Map an open string onto a closed enum, or None when unrecognized."""
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return None
    key = str(value).strip().lower()
    for member in enum_cls:
        if member.value == key:
            return member
    return None


# =============================================================================
# Base Model
# =============================================================================

class RecordBase(BaseModel):
    """Base model for all farm records.

    Records are frozen: the id never changes after creation and local
    mutations always produce a new instance.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    table_name: ClassVar[str] = ""
    # field name -> default used when the stored value is not a known member
    enum_defaults: ClassVar[Dict[str, Enum]] = {}

    id: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_enums(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not cls.enum_defaults:
            return data
        data = dict(data)
        for field_name, default in cls.enum_defaults.items():
            raw = data.get(field_name)
            member = _normalize_enum(type(default), raw)
            if member is None:
                logger.warning(
                    f"Unrecognized {field_name}={raw!r} in {cls.table_name} row "
                    f"{data.get('id')!r}; using {default.value!r}",
                    extra_fields={"table": cls.table_name, "field": field_name},
                )
                member = default
            data[field_name] = member
        return data

    def to_row(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible row for the remote store."""
        return self.model_dump(mode="json")


# =============================================================================
# Primary Entities
# =============================================================================

class LivestockRecord(RecordBase):
    """An animal in the herd."""
    table_name: ClassVar[str] = "livestock"
    enum_defaults: ClassVar[Dict[str, Enum]] = {"health_status": HealthStatus.HEALTHY}

    name: str
    breed: str
    gender: str
    age: Optional[str] = None
    weight: Optional[str] = None
    health_status: HealthStatus = HealthStatus.HEALTHY
    image_url: Optional[str] = None
    birth_date: Optional[DateString] = None
    purchase_date: Optional[DateString] = None
    purchase_price: Optional[str] = None
    notes: Optional[str] = None


class Task(RecordBase):
    """A scheduled farm task."""
    table_name: ClassVar[str] = "tasks"
    enum_defaults: ClassVar[Dict[str, Enum]] = {
        "category": TaskCategory.GENERAL,
        "priority": TaskPriority.MEDIUM,
    }

    title: str
    description: Optional[str] = None
    category: TaskCategory = TaskCategory.GENERAL
    due_date: DateString
    priority: TaskPriority = TaskPriority.MEDIUM
    completed: bool = False
    assignee: Optional[str] = None
    animal_id: Optional[str] = None


class FinancialTransaction(RecordBase):
    """An income (positive amount) or expense (negative amount)."""
    table_name: ClassVar[str] = "financial_transactions"
    enum_defaults: ClassVar[Dict[str, Enum]] = {"status": TransactionStatus.PENDING}

    description: str
    amount: DecimalValue
    category: str
    date: DateString
    payment_method: Optional[str] = None
    status: TransactionStatus = TransactionStatus.PENDING

    @field_serializer("amount", when_used="json")
    def _amount_as_number(self, value: Decimal) -> float:
        return float(value)

    @property
    def is_income(self) -> bool:
        return self.amount > 0


# =============================================================================
# Reference Entities (display-only)
# =============================================================================

class FeedingSchedule(RecordBase):
    """Recurring feeding schedule for an animal group."""
    table_name: ClassVar[str] = "feeding_schedules"

    name: str
    animal_group: str
    feed_type: str
    quantity: str
    frequency: str
    time: str
    status: str
    assignee: Optional[str] = None


class FeedInventoryItem(RecordBase):
    """Stocked feed."""
    table_name: ClassVar[str] = "feed_inventory"

    name: str
    category: str
    quantity_available: str
    unit: Optional[str] = None
    status: str
    supplier: Optional[str] = None
    cost: Optional[str] = None
    last_purchase: Optional[DateString] = None


class HealthRecord(RecordBase):
    """A vaccination, treatment or examination performed on one animal."""
    table_name: ClassVar[str] = "health_records"

    animal_id: str
    animal_name: str
    type: str
    date: DateString
    description: Optional[str] = None
    performed_by: Optional[str] = None


class VaccinationSchedule(RecordBase):
    """A vaccination due for a group of animals."""
    table_name: ClassVar[str] = "vaccination_schedules"

    vaccine_name: str
    animal_ids: List[str] = Field(default_factory=list)
    animal_count: int
    due_date: DateString
    status: str


RECORD_TYPES: Dict[str, Type[RecordBase]] = {
    model.table_name: model
    for model in (
        LivestockRecord,
        Task,
        FinancialTransaction,
        FeedingSchedule,
        FeedInventoryItem,
        HealthRecord,
        VaccinationSchedule,
    )
}


# =============================================================================
# Boundary Parsing
# =============================================================================

R = TypeVar("R", bound=RecordBase)


class RecordValidationError(ValueError):
    """A remote row could not be parsed into its record model."""

    def __init__(self, table: str, row_id: Optional[str], errors: List[Dict[str, Any]]):
        fields = ", ".join(".".join(str(p) for p in e.get("loc", ())) for e in errors)
        super().__init__(f"Invalid {table} row {row_id!r}: {fields}")
        self.table = table
        self.row_id = row_id
        self.errors = errors


def parse_row(model: Type[R], row: Dict[str, Any]) -> R:
    """Parse one remote row into `model`, normalizing enums along the way.

    Raises:
        RecordValidationError: The row is missing required fields or carries
            values that cannot be coerced.
    """
    try:
        return model.model_validate(row)
    except ValidationError as e:
        raise RecordValidationError(model.table_name, row.get("id"), e.errors()) from e


def parse_rows(model: Type[R], rows: List[Dict[str, Any]]) -> List[R]:
    """Parse a list of rows, preserving order."""
    return [parse_row(model, row) for row in rows]


def serialize_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a draft or partial update into JSON-compatible column values."""
    out: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, Decimal):
            value = float(value)
        elif isinstance(value, datetime):
            value = value.isoformat()
        elif isinstance(value, date):
            value = value.isoformat()
        out[key] = value
    return out
