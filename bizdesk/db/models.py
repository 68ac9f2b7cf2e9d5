"""
Database models for bizdesk.

Row-level dataclasses returned by the repositories. Every model can be built
from a ``sqlite3.Row`` and converted back to a plain dictionary for the
bridge layer.
"""

import sqlite3
from dataclasses import asdict, dataclass, field, fields
from typing import Optional


class Record:
    """Mixin giving dataclass rows ``from_row`` and ``to_dict``."""

    @classmethod
    def from_row(cls, row: sqlite3.Row):
        """Create an instance from a row, ignoring columns the model lacks."""
        keys = row.keys()
        return cls(**{f.name: row[f.name] for f in fields(cls) if f.name in keys})

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return asdict(self)


@dataclass
class Business(Record):
    id: int
    name: str
    currency: Optional[str] = "USD"
    created_at: Optional[str] = None


@dataclass
class Client(Record):
    id: int
    business_id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None


@dataclass
class Activity(Record):
    """Append-only log line attached to a client, lead or content item."""

    id: int
    action: str
    created_at: Optional[str] = None


@dataclass
class Lead(Record):
    id: int
    business_id: Optional[int]
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = "New"
    expected_value: float = 0.0
    probability: int = 0
    created_at: Optional[str] = None

    @property
    def forecast(self) -> float:
        return (self.expected_value or 0.0) * (self.probability or 0) / 100.0

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["forecast"] = self.forecast
        return data


@dataclass
class Account(Record):
    id: int
    business_id: int
    name: str
    type: str
    code: Optional[str] = None
    tax_category: Optional[str] = None
    created_at: Optional[str] = None


@dataclass
class Transaction(Record):
    """
    A single income or expense movement.

    ``account_name`` and ``client_name`` are filled only by listing queries
    that join the related tables.
    """

    id: int
    business_id: int
    date: str
    description: str
    amount: float
    type: str
    account_id: Optional[int] = None
    client_id: Optional[int] = None
    created_at: Optional[str] = None
    account_name: Optional[str] = None
    client_name: Optional[str] = None

    @property
    def signed_amount(self) -> float:
        """Amount with the sign implied by the transaction type."""
        return self.amount if self.type == "Income" else -self.amount


@dataclass
class Document(Record):
    id: int
    business_id: int
    name: str
    type: str
    notes: Optional[str] = None
    expiry_date: Optional[str] = None
    status: Optional[str] = "Active"
    created_at: Optional[str] = None


@dataclass
class ClientDocument(Record):
    id: int
    client_id: int
    name: str
    type: Optional[str] = None
    notes: Optional[str] = None
    file_path: Optional[str] = None
    created_at: Optional[str] = None


@dataclass
class InvoiceItem(Record):
    id: int
    invoice_id: int
    description: str
    quantity: float = 1.0
    unit_price: float = 0.0
    amount: float = 0.0


@dataclass
class Invoice(Record):
    id: int
    business_id: int
    client_id: int
    invoice_number: str
    date: str
    due_date: Optional[str] = None
    status: Optional[str] = "Draft"
    total_amount: float = 0.0
    notes: Optional[str] = None
    created_at: Optional[str] = None
    client_name: Optional[str] = None
    items: list[InvoiceItem] = field(default_factory=list)


@dataclass
class Product(Record):
    id: int
    business_id: int
    name: str
    type: Optional[str] = "Service"
    price: float = 0.0
    description: Optional[str] = None
    created_at: Optional[str] = None


@dataclass
class Task(Record):
    id: int
    business_id: int
    client_id: int
    title: str
    description: Optional[str] = None
    status: Optional[str] = "Pending"
    due_date: Optional[str] = None
    created_at: Optional[str] = None


@dataclass
class ContentItem(Record):
    id: int
    client_id: int
    platform: str
    title: str
    caption: Optional[str] = None
    hashtags: Optional[str] = None
    status: Optional[str] = "IDEA"
    scheduled_date: Optional[str] = None
    posted_date: Optional[str] = None
    cta_hook: Optional[str] = None
    media_path: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class Caption(Record):
    id: int
    caption: str
    client_id: Optional[int] = None
    platform: Optional[str] = None
    tags: Optional[str] = None
    created_at: Optional[str] = None


@dataclass
class HashtagSet(Record):
    id: int
    hashtags: str
    client_id: Optional[int] = None
    platform: Optional[str] = None
    created_at: Optional[str] = None
