"""
Main repository facade for bizdesk.

Composes every entity repository over a single ConnectionManager so callers
hold one object for the whole back office database.
"""

import logging
from pathlib import Path
from typing import Optional

from bizdesk.config import get_db_path

from .accounts import AccountRepository
from .base import ConnectionManager
from .businesses import BusinessRepository
from .clients import ClientRepository
from .content import ContentRepository
from .documents import DocumentRepository
from .invoices import InvoiceRepository
from .leads import LeadRepository
from .products import ProductRepository
from .queries import QueryRepository
from .schema import SchemaManager
from .settings import SettingsRepository
from .tasks import TaskRepository
from .transactions import TransactionRepository

logger = logging.getLogger(__name__)


class BackOfficeRepository:
    """
    Facade over the back office database.

    Opening the repository ensures the schema, applies pending column
    migrations and seeds defaults before any operation is served.

    Sub-repositories:
    - businesses, clients, leads, tasks: CRM
    - accounts, transactions, invoices, products: bookkeeping
    - documents: business and per-client records
    - content: content pipeline, captions and hashtag sets
    - settings: key/value configuration
    - reports: dashboard and report aggregates
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Open the database and bring its schema up to date.

        Args:
            db_path: Path to the SQLite database file. Defaults to the
                configured path (BIZDESK_DB_PATH or data/bizdesk.sqlite)
        """
        self.manager = ConnectionManager(Path(db_path) if db_path else get_db_path())
        self.manager.open()

        self.schema = SchemaManager(self.manager)
        applied = self.schema.initialize()
        if applied:
            logger.info(f"Applied column migrations: {', '.join(applied)}")

        self.businesses = BusinessRepository(self.manager)
        self.clients = ClientRepository(self.manager)
        self.leads = LeadRepository(self.manager)
        self.accounts = AccountRepository(self.manager)
        self.transactions = TransactionRepository(self.manager)
        self.documents = DocumentRepository(self.manager)
        self.invoices = InvoiceRepository(self.manager)
        self.products = ProductRepository(self.manager)
        self.tasks = TaskRepository(self.manager)
        self.content = ContentRepository(self.manager)
        self.settings = SettingsRepository(self.manager)
        self.reports = QueryRepository(self.manager)

        logger.info(f"Repository ready at {self.db_path}")

    @property
    def db_path(self) -> Path:
        return self.manager.db_path

    def close(self):
        self.manager.close()


# Singleton instance
_default_repository: Optional[BackOfficeRepository] = None


def get_repository() -> BackOfficeRepository:
    """Get or create the default repository instance."""
    global _default_repository
    if _default_repository is None:
        _default_repository = BackOfficeRepository()
    return _default_repository
