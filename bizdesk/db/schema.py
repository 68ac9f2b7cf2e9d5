"""
Schema and migration manager.

Creates every table on startup, applies additive column migrations to
databases created by older releases, and seeds reference data into empty
tables. All of it is idempotent and safe to run on every start.
"""

import logging
import sqlite3
from typing import Optional

from bizdesk.config import DEFAULT_BUSINESS, DEFAULT_SETTINGS
from bizdesk.models.account import DEFAULT_ACCOUNTS, DEFAULT_TAX_CATEGORIES

from .base import ConnectionManager

logger = logging.getLogger(__name__)


TABLES: list[tuple[str, str]] = [
    (
        "businesses",
        """
        CREATE TABLE IF NOT EXISTS businesses (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            currency TEXT DEFAULT 'USD',
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "clients",
        """
        CREATE TABLE IF NOT EXISTS clients (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            business_id INTEGER NOT NULL REFERENCES businesses(id),
            name TEXT NOT NULL,
            email TEXT,
            phone TEXT,
            notes TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "client_activities",
        """
        CREATE TABLE IF NOT EXISTS client_activities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            client_id INTEGER NOT NULL REFERENCES clients(id) ON DELETE CASCADE,
            action TEXT NOT NULL,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "leads",
        """
        CREATE TABLE IF NOT EXISTS leads (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            business_id INTEGER REFERENCES businesses(id),
            name TEXT NOT NULL,
            email TEXT,
            phone TEXT,
            notes TEXT,
            status TEXT DEFAULT 'New',
            expected_value REAL DEFAULT 0,
            probability INTEGER DEFAULT 0,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "lead_activities",
        """
        CREATE TABLE IF NOT EXISTS lead_activities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            lead_id INTEGER NOT NULL REFERENCES leads(id) ON DELETE CASCADE,
            action TEXT NOT NULL,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "accounts",
        """
        CREATE TABLE IF NOT EXISTS accounts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            business_id INTEGER NOT NULL REFERENCES businesses(id),
            name TEXT NOT NULL,
            type TEXT NOT NULL CHECK(
                type IN ('Income', 'Expense', 'Asset', 'Liability', 'Equity')
            ),
            code TEXT,
            tax_category TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "transactions",
        """
        CREATE TABLE IF NOT EXISTS transactions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            business_id INTEGER NOT NULL REFERENCES businesses(id),
            date TEXT NOT NULL,
            description TEXT NOT NULL,
            amount REAL NOT NULL CHECK(amount >= 0),
            type TEXT NOT NULL CHECK(type IN ('Income', 'Expense')),
            account_id INTEGER REFERENCES accounts(id) ON DELETE SET NULL,
            client_id INTEGER REFERENCES clients(id) ON DELETE SET NULL,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "documents",
        """
        CREATE TABLE IF NOT EXISTS documents (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            business_id INTEGER NOT NULL REFERENCES businesses(id),
            name TEXT NOT NULL,
            type TEXT NOT NULL,
            notes TEXT,
            expiry_date TEXT,
            status TEXT DEFAULT 'Active',
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "invoices",
        """
        CREATE TABLE IF NOT EXISTS invoices (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            business_id INTEGER NOT NULL REFERENCES businesses(id),
            client_id INTEGER NOT NULL REFERENCES clients(id),
            invoice_number TEXT NOT NULL,
            date TEXT NOT NULL,
            due_date TEXT,
            status TEXT DEFAULT 'Draft' CHECK(
                status IN ('Draft', 'Sent', 'Paid', 'Void')
            ),
            total_amount REAL NOT NULL,
            notes TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "invoice_items",
        """
        CREATE TABLE IF NOT EXISTS invoice_items (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            invoice_id INTEGER NOT NULL REFERENCES invoices(id) ON DELETE CASCADE,
            description TEXT NOT NULL,
            quantity REAL DEFAULT 1,
            unit_price REAL DEFAULT 0,
            amount REAL DEFAULT 0
        )
        """,
    ),
    (
        "products",
        """
        CREATE TABLE IF NOT EXISTS products (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            business_id INTEGER NOT NULL REFERENCES businesses(id),
            name TEXT NOT NULL,
            type TEXT DEFAULT 'Service',
            price REAL DEFAULT 0,
            description TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "client_documents",
        """
        CREATE TABLE IF NOT EXISTS client_documents (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            client_id INTEGER NOT NULL REFERENCES clients(id) ON DELETE CASCADE,
            name TEXT NOT NULL,
            type TEXT,
            notes TEXT,
            file_path TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "tasks",
        """
        CREATE TABLE IF NOT EXISTS tasks (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            business_id INTEGER NOT NULL REFERENCES businesses(id),
            client_id INTEGER NOT NULL REFERENCES clients(id) ON DELETE CASCADE,
            title TEXT NOT NULL,
            description TEXT,
            status TEXT DEFAULT 'Pending',
            due_date TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "content_items",
        """
        CREATE TABLE IF NOT EXISTS content_items (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            client_id INTEGER NOT NULL REFERENCES clients(id) ON DELETE CASCADE,
            platform TEXT NOT NULL,
            title TEXT NOT NULL,
            caption TEXT,
            hashtags TEXT,
            status TEXT DEFAULT 'IDEA',
            scheduled_date TEXT,
            posted_date TEXT,
            cta_hook TEXT,
            media_path TEXT,
            notes TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "content_activities",
        """
        CREATE TABLE IF NOT EXISTS content_activities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            content_id INTEGER NOT NULL REFERENCES content_items(id) ON DELETE CASCADE,
            action TEXT NOT NULL,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "caption_library",
        """
        CREATE TABLE IF NOT EXISTS caption_library (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            client_id INTEGER REFERENCES clients(id) ON DELETE CASCADE,
            platform TEXT,
            caption TEXT NOT NULL,
            tags TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "hashtag_sets",
        """
        CREATE TABLE IF NOT EXISTS hashtag_sets (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            client_id INTEGER REFERENCES clients(id) ON DELETE CASCADE,
            platform TEXT,
            hashtags TEXT NOT NULL,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """,
    ),
    (
        "settings",
        """
        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT
        )
        """,
    ),
]

# Columns added after the first release: (table, column, definition)
COLUMN_MIGRATIONS: list[tuple[str, str, str]] = [
    ("leads", "expected_value", "REAL DEFAULT 0"),
    ("leads", "probability", "INTEGER DEFAULT 0"),
    ("accounts", "tax_category", "TEXT"),
    ("content_items", "cta_hook", "TEXT"),
    ("content_items", "media_path", "TEXT"),
]

INDEXES: list[tuple[str, str, str]] = [
    ("idx_clients_business_id", "clients", "business_id"),
    ("idx_client_activities_client_id", "client_activities", "client_id"),
    ("idx_leads_business_id", "leads", "business_id"),
    ("idx_lead_activities_lead_id", "lead_activities", "lead_id"),
    ("idx_accounts_business_id", "accounts", "business_id"),
    ("idx_transactions_business_date", "transactions", "business_id, date"),
    ("idx_transactions_account_id", "transactions", "account_id"),
    ("idx_documents_business_expiry", "documents", "business_id, expiry_date"),
    ("idx_invoices_business_id", "invoices", "business_id"),
    ("idx_invoice_items_invoice_id", "invoice_items", "invoice_id"),
    ("idx_products_business_id", "products", "business_id"),
    ("idx_client_documents_client_id", "client_documents", "client_id"),
    ("idx_tasks_client_id", "tasks", "client_id"),
    ("idx_content_items_client_id", "content_items", "client_id"),
    ("idx_content_activities_content_id", "content_activities", "content_id"),
]


def get_columns(conn: sqlite3.Connection, table: str) -> list[str]:
    """Column names of a live table, in declaration order."""
    return [row[1] for row in conn.execute(f"PRAGMA table_info({table})")]


class SchemaManager:
    """Creates tables, applies column migrations and seeds default rows."""

    def __init__(self, manager: ConnectionManager):
        self.manager = manager

    def initialize(self) -> list[str]:
        """Bring the live database up to date. Returns the migrations applied."""
        with self.manager.connection() as conn:
            return self.apply(conn)

    def apply(self, conn: sqlite3.Connection) -> list[str]:
        """Run table creation, migrations and seeds on an open connection."""
        self.create_tables(conn)
        applied = self.migrate(conn)
        self._create_indexes(conn)
        self.seed(conn)
        logger.debug("Schema initialized successfully")
        return applied

    def create_tables(self, conn: sqlite3.Connection):
        for table, ddl in TABLES:
            conn.execute(ddl)
            logger.debug(f"Ensured table {table}")

    def migrate(self, conn: sqlite3.Connection) -> list[str]:
        """
        Add any column from COLUMN_MIGRATIONS missing from its table.

        Each migration stands alone: a failure is logged and the remaining
        ones still run.
        """
        applied = []
        for table, column, definition in COLUMN_MIGRATIONS:
            try:
                if column in get_columns(conn, table):
                    continue
                conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {definition}")
                applied.append(f"{table}.{column}")
                logger.info(f"Added {column} column to {table}")
            except sqlite3.Error as e:
                logger.error(
                    f"Failed to add {column} column to {table}: {e}", exc_info=True
                )
        return applied

    def _create_indexes(self, conn: sqlite3.Connection):
        for index_name, table, columns in INDEXES:
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS {index_name} ON {table}({columns})"
            )

    def seed(self, conn: sqlite3.Connection):
        """Insert reference data, each set only when its table is empty."""
        business_id = self._seed_business(conn)
        if business_id is not None:
            self._seed_accounts(conn, business_id)
        self._seed_tax_categories(conn)
        self._seed_settings(conn)

    @staticmethod
    def _is_empty(conn: sqlite3.Connection, table: str) -> bool:
        return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0] == 0

    def _seed_business(self, conn: sqlite3.Connection) -> Optional[int]:
        if self._is_empty(conn, "businesses"):
            conn.execute(
                "INSERT INTO businesses (name, currency) VALUES (?, ?)",
                DEFAULT_BUSINESS,
            )
            logger.info("Default business created")
        row = conn.execute("SELECT id FROM businesses ORDER BY id ASC LIMIT 1").fetchone()
        return row["id"] if row else None

    def _seed_accounts(self, conn: sqlite3.Connection, business_id: int):
        if not self._is_empty(conn, "accounts"):
            return
        conn.executemany(
            "INSERT INTO accounts (business_id, name, type) VALUES (?, ?, ?)",
            [(business_id, name, account_type.value) for name, account_type in DEFAULT_ACCOUNTS],
        )
        logger.info("Default accounts seeded")

    def _seed_tax_categories(self, conn: sqlite3.Connection):
        labelled = conn.execute(
            "SELECT COUNT(*) FROM accounts WHERE tax_category IS NOT NULL"
        ).fetchone()[0]
        if labelled:
            return
        conn.executemany(
            "UPDATE accounts SET tax_category = ? WHERE name = ? AND tax_category IS NULL",
            [(category, name) for name, category in DEFAULT_TAX_CATEGORIES.items()],
        )
        logger.info("Default tax categories applied")

    def _seed_settings(self, conn: sqlite3.Connection):
        if not self._is_empty(conn, "settings"):
            return
        conn.executemany(
            "INSERT INTO settings (key, value) VALUES (?, ?)", DEFAULT_SETTINGS
        )
        logger.info("Default settings seeded")

    def describe(self) -> dict[str, list[str]]:
        """Live column list for every managed table."""
        with self.manager.connection() as conn:
            return {table: get_columns(conn, table) for table, _ in TABLES}
