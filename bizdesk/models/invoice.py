"""
Invoice models.

An invoice total is always derived from its line items; any total sent by
the caller is ignored.
"""

import datetime as dt
from typing import ClassVar, Optional

from pydantic import Field, PositiveInt, ValidationInfo, field_validator

from bizdesk.config import MAX_NOTES_LENGTH

from .base import InputModel, LabelEnum, Money


class InvoiceStatus(LabelEnum):
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    VOID = "Void"


class InvoiceItemInput(InputModel):
    label: ClassVar[str] = "invoice item"

    description: str = Field(min_length=1, max_length=500)
    quantity: Money = 1.0
    unit_price: Money = 0.0

    @property
    def amount(self) -> float:
        return self.quantity * self.unit_price


class InvoiceInput(InputModel):
    """Validated invoice header plus its line items."""

    label: ClassVar[str] = "invoice"

    business_id: PositiveInt
    client_id: PositiveInt
    invoice_number: str = Field(min_length=1, max_length=50)
    date: dt.date
    due_date: Optional[dt.date] = None
    status: InvoiceStatus = InvoiceStatus.DRAFT
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    items: list[InvoiceItemInput] = Field(min_length=1)

    @field_validator("due_date")
    @classmethod
    def _due_after_issue(cls, value: Optional[dt.date], info: ValidationInfo):
        issued = info.data.get("date")
        if value is not None and issued is not None and value < issued:
            raise ValueError("due_date cannot be earlier than date")
        return value

    @property
    def total_amount(self) -> float:
        """Sum of quantity x unit_price over all items."""
        return sum(item.amount for item in self.items)
