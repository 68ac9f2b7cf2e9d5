"""
Database module for the bizdesk back office.

This module provides the persistence layer for the CRM, bookkeeping,
document and content records of a small business.

Structure:
- base.py: Connection manager and base repository
- schema.py: Table creation, column migrations and seed data
- models.py: Row dataclasses (Client, Lead, Transaction, Invoice, etc.)
- businesses.py, clients.py, leads.py, tasks.py: CRM records
- accounts.py, transactions.py, invoices.py, products.py: Bookkeeping
- documents.py: Business documents and per-client files
- content.py: Content items, captions and hashtag sets
- settings.py: Key/value settings
- queries.py: Dashboard and report aggregates
- repository.py: Main facade that composes all sub-repositories
"""

from .accounts import AccountRepository
from .base import BaseRepository, ConnectionManager
from .businesses import BusinessRepository
from .clients import ClientRepository
from .content import ContentRepository
from .documents import DocumentRepository
from .invoices import InvoiceRepository
from .leads import LeadRepository
from .models import (
    Account,
    Activity,
    Business,
    Caption,
    Client,
    ClientDocument,
    ContentItem,
    Document,
    HashtagSet,
    Invoice,
    InvoiceItem,
    Lead,
    Product,
    Task,
    Transaction,
)
from .products import ProductRepository
from .queries import DashboardStats, FinancialReport, MonthlyTotal, QueryRepository
from .repository import BackOfficeRepository, get_repository
from .schema import SchemaManager
from .settings import SettingsRepository
from .tasks import TaskRepository
from .transactions import TransactionRepository

__all__ = [
    # Base
    "BaseRepository",
    "ConnectionManager",
    "SchemaManager",
    # Models
    "Account",
    "Activity",
    "Business",
    "Caption",
    "Client",
    "ClientDocument",
    "ContentItem",
    "Document",
    "HashtagSet",
    "Invoice",
    "InvoiceItem",
    "Lead",
    "Product",
    "Task",
    "Transaction",
    # Reports
    "DashboardStats",
    "FinancialReport",
    "MonthlyTotal",
    # Repositories
    "AccountRepository",
    "BackOfficeRepository",
    "BusinessRepository",
    "ClientRepository",
    "ContentRepository",
    "DocumentRepository",
    "InvoiceRepository",
    "LeadRepository",
    "ProductRepository",
    "QueryRepository",
    "SettingsRepository",
    "TaskRepository",
    "TransactionRepository",
    # Utilities
    "get_repository",
]
