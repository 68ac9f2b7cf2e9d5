"""
Accounts repository module for the chart of accounts.

Accounts categorise transactions and carry the tax category used by the
tax report.
"""

import logging
from typing import Optional

from bizdesk.errors import NotFoundError
from bizdesk.models.account import AccountInput

from .base import BaseRepository
from .models import Account

logger = logging.getLogger(__name__)


class AccountRepository(BaseRepository):
    """Repository for the chart of accounts."""

    def list_by_business(self, business_id: int) -> list[Account]:
        """Accounts of a business ordered by type, then name."""
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT * FROM accounts
                WHERE business_id = ?
                ORDER BY type, name
                """,
                (business_id,),
            )
            return [Account.from_row(row) for row in cursor.fetchall()]

    def get_by_id(self, account_id: int) -> Optional[Account]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM accounts WHERE id = ?", (account_id,)
            ).fetchone()
            return Account.from_row(row) if row else None

    def get_by_name(self, business_id: int, name: str) -> Optional[Account]:
        """Exact-name lookup within a business."""
        if not name:
            return None
        with self._get_connection() as conn:
            row = conn.execute(
                """
                SELECT * FROM accounts
                WHERE business_id = ? AND name = ?
                ORDER BY id ASC LIMIT 1
                """,
                (business_id, name.strip()),
            ).fetchone()
            return Account.from_row(row) if row else None

    def create(self, account: AccountInput) -> Account:
        with self._get_connection() as conn:
            account_id = self._insert(
                conn,
                "accounts",
                {
                    "business_id": account.business_id,
                    "name": account.name,
                    "type": account.type.value,
                    "code": account.code,
                    "tax_category": account.tax_category,
                },
            )
            row = conn.execute(
                "SELECT * FROM accounts WHERE id = ?", (account_id,)
            ).fetchone()

        logger.info(
            f"Created account '{account.name}' (type: {account.type.value}) "
            f"for business {account.business_id}"
        )
        return Account.from_row(row)

    def update(self, account: AccountInput) -> Account:
        with self._get_connection() as conn:
            updated = self._update_fields(
                conn,
                "accounts",
                account.id,
                {
                    "name": account.name,
                    "type": account.type.value,
                    "code": account.code,
                    "tax_category": account.tax_category,
                },
            )
            if not updated:
                raise NotFoundError("Account", account.id)
            row = conn.execute(
                "SELECT * FROM accounts WHERE id = ?", (account.id,)
            ).fetchone()
        return Account.from_row(row)

    def delete(self, account_id: int) -> bool:
        """Delete an account; its transactions keep their rows with no account."""
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM accounts WHERE id = ?", (account_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted account {account_id}")
        return deleted
