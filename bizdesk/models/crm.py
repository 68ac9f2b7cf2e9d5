"""
Client relationship models: businesses, clients, leads and tasks.
"""

import datetime as dt
from typing import ClassVar, Optional

from pydantic import Field, PositiveInt, field_validator

from bizdesk.config import (
    MAX_NAME_LENGTH,
    MAX_NOTES_LENGTH,
    MAX_PROBABILITY,
    MIN_PROBABILITY,
)

from .base import InputModel, LabelEnum, Money


class LeadStatus(LabelEnum):
    """
    Well-known lead pipeline stages.

    The status column is free text, so other stages are stored as given;
    these are the ones the reporting queries look at.
    """

    NEW = "New"
    NURTURING = "Nurturing"
    PROPOSAL = "Proposal"
    CONVERTED = "Converted"
    LOST = "Lost"


class TaskStatus(LabelEnum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class BusinessInput(InputModel):
    label: ClassVar[str] = "business"

    id: Optional[PositiveInt] = None
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    currency: str = Field(default="USD", min_length=3, max_length=3)

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.upper()


class ClientInput(InputModel):
    """Validated client fields, shared by create and update."""

    required_on_create: ClassVar[tuple[str, ...]] = ("business_id",)
    label: ClassVar[str] = "client"

    id: Optional[PositiveInt] = None
    business_id: Optional[PositiveInt] = None
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    email: Optional[str] = Field(default=None, max_length=254)
    phone: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)


class LeadInput(InputModel):
    """Validated lead fields, shared by create and update."""

    required_on_create: ClassVar[tuple[str, ...]] = ("business_id",)
    label: ClassVar[str] = "lead"

    id: Optional[PositiveInt] = None
    business_id: Optional[PositiveInt] = None
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    email: Optional[str] = Field(default=None, max_length=254)
    phone: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    status: str = Field(default=LeadStatus.NEW.value, max_length=50)
    expected_value: Money = 0.0
    probability: int = Field(default=0, ge=MIN_PROBABILITY, le=MAX_PROBABILITY)

    @field_validator("status")
    @classmethod
    def _canonical_status(cls, value: str) -> str:
        # Known stages are normalised to their canonical spelling
        try:
            return LeadStatus(value).value
        except ValueError:
            return value

    @property
    def forecast(self) -> float:
        """Probability-weighted deal value."""
        return self.expected_value * self.probability / 100.0


class TaskInput(InputModel):
    required_on_create: ClassVar[tuple[str, ...]] = ("business_id", "client_id")
    label: ClassVar[str] = "task"

    id: Optional[PositiveInt] = None
    business_id: Optional[PositiveInt] = None
    client_id: Optional[PositiveInt] = None
    title: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    status: str = Field(default=TaskStatus.PENDING.value, max_length=50)
    due_date: Optional[dt.date] = None
