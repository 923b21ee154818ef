"""Form models - client-side validation before any remote call.

A form that fails validation never reaches the remote store. Errors are
reported per field so the UI can show them inline next to the offending
input.
"""

from __future__ import annotations

import datetime as dt
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.models.records import (
    HealthStatus,
    PAYMENT_METHODS,
    TRANSACTION_CATEGORIES,
    TaskCategory,
    TaskPriority,
    TransactionStatus,
    signed_amount,
)


class FormValidationError(ValueError):
    """One or more form fields are invalid.

    Attributes:
        errors: field name -> human-readable message
    """

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


class FormBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, validate_default=True)

    @classmethod
    def parse(cls, data: Dict[str, Any]):
        """Validate raw form data, raising FormValidationError on failure."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            errors: Dict[str, str] = {}
            for err in e.errors():
                field = str(err["loc"][0]) if err.get("loc") else "__all__"
                message = err.get("msg", "Invalid value")
                # pydantic prefixes custom messages with "Value error, "
                if message.startswith("Value error, "):
                    message = message[len("Value error, "):]
                errors.setdefault(field, message)
            raise FormValidationError(errors) from e


def _required(value: Optional[str], message: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(message)
    return value


# =============================================================================
# Task Form
# =============================================================================

class TaskForm(FormBase):
    """Create/edit form for a task."""
    title: str = ""
    description: Optional[str] = None
    category: TaskCategory = TaskCategory.GENERAL
    due_date: Optional[date] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    assignee: Optional[str] = None
    animal_id: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title_length(cls, value: str) -> str:
        if len(value or "") < 3:
            raise ValueError("Title must be at least 3 characters.")
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _category_member(cls, value):
        if isinstance(value, str) and value.strip().lower() not in {c.value for c in TaskCategory}:
            raise ValueError("Please select a valid category.")
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("priority", mode="before")
    @classmethod
    def _priority_member(cls, value):
        if isinstance(value, str) and value.strip().lower() not in {p.value for p in TaskPriority}:
            raise ValueError("Please select a priority.")
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("due_date")
    @classmethod
    def _due_date_required(cls, value: Optional[date]) -> date:
        if value is None:
            raise ValueError("A due date is required.")
        return value

    @field_validator("assignee", "description", "animal_id")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    def to_draft(self) -> Dict[str, Any]:
        """Fields for a new task; new tasks always start pending."""
        return {
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "due_date": self.due_date.isoformat(),
            "priority": self.priority.value,
            "assignee": self.assignee,
            "animal_id": self.animal_id,
            "completed": False,
        }

    def to_update(self) -> Dict[str, Any]:
        """Fields for editing a task; completion is toggled separately."""
        draft = self.to_draft()
        draft.pop("completed")
        return draft


# =============================================================================
# Transaction Form
# =============================================================================

class TransactionForm(FormBase):
    """Create form for a financial transaction.

    The amount is entered as a magnitude; its sign comes from the category.
    """
    description: str = ""
    amount: Optional[Decimal] = None
    category: str = "Feed"
    date: dt.date = Field(default_factory=dt.date.today)
    payment_method: str = "Bank Transfer"
    status: TransactionStatus = TransactionStatus.COMPLETED

    @field_validator("description")
    @classmethod
    def _description_required(cls, value: str) -> str:
        return _required(value, "Description is required.")

    @field_validator("amount")
    @classmethod
    def _amount_required(cls, value: Optional[Decimal]) -> Decimal:
        if value is None:
            raise ValueError("Amount is required.")
        if value == 0:
            raise ValueError("Amount must not be zero.")
        return value

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        for category in TRANSACTION_CATEGORIES:
            if category.lower() == value.lower():
                return category
        raise ValueError("Please select a valid category.")

    @field_validator("payment_method")
    @classmethod
    def _known_method(cls, value: str) -> str:
        for method in PAYMENT_METHODS:
            if method.lower() == value.lower():
                return method
        raise ValueError("Please select a payment method.")

    def to_draft(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "amount": signed_amount(self.category, self.amount),
            "category": self.category,
            "date": self.date.isoformat(),
            "payment_method": self.payment_method,
            "status": self.status.value,
        }


# =============================================================================
# Livestock Form
# =============================================================================

class LivestockForm(FormBase):
    """Create/edit form for an animal."""
    name: str = ""
    breed: str = ""
    gender: str = ""
    age: Optional[str] = None
    weight: Optional[str] = None
    health_status: HealthStatus = HealthStatus.HEALTHY
    image_url: Optional[str] = None
    birth_date: Optional[date] = None
    purchase_date: Optional[date] = None
    purchase_price: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name_required(cls, value: str) -> str:
        return _required(value, "Name is required.")

    @field_validator("breed")
    @classmethod
    def _breed_required(cls, value: str) -> str:
        return _required(value, "Breed is required.")

    @field_validator("gender")
    @classmethod
    def _gender_required(cls, value: str) -> str:
        return _required(value, "Gender is required.")

    @field_validator("health_status", mode="before")
    @classmethod
    def _health_member(cls, value):
        if isinstance(value, str):
            key = value.strip().lower()
            if key not in {h.value for h in HealthStatus}:
                raise ValueError("Please select a valid health status.")
            return key
        return value

    @field_validator("age", "weight", "image_url", "purchase_price", "notes")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    def to_draft(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
