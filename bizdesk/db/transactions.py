"""
Transactions repository module for transaction CRUD operations.

Handles all transaction-related database operations including:
- Creating transactions (insert)
- Listing transactions, optionally windowed to one calendar month
- Updating transactions
- Deleting transactions
"""

import logging
from typing import Optional

from bizdesk.config import TRANSACTION_LIST_LIMIT
from bizdesk.errors import NotFoundError
from bizdesk.models.account import TransactionInput

from .base import BaseRepository
from .dates import iso_date, parse_month_filter
from .models import Transaction

logger = logging.getLogger(__name__)

_SELECT_WITH_NAMES = """
    SELECT t.*, a.name AS account_name, c.name AS client_name
    FROM transactions t
    LEFT JOIN accounts a ON t.account_id = a.id
    LEFT JOIN clients c ON t.client_id = c.id
"""


class TransactionRepository(BaseRepository):
    """
    Repository for income and expense transactions.

    Amounts are stored unsigned; the type column carries the direction.
    """

    # =========================================================================
    # Create Operations
    # =========================================================================

    def create(self, txn: TransactionInput) -> Transaction:
        """
        Insert a new transaction.

        Args:
            txn: Validated transaction fields

        Returns:
            The stored Transaction with account and client names
        """
        with self._get_connection() as conn:
            txn_id = self._insert(conn, "transactions", self._columns(txn))
            row = conn.execute(
                f"{_SELECT_WITH_NAMES} WHERE t.id = ?", (txn_id,)
            ).fetchone()

        logger.info(
            f"Created {txn.type.value} transaction {txn_id} of {txn.amount:,.2f} "
            f"for business {txn.business_id}"
        )
        return Transaction.from_row(row)

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_by_id(self, txn_id: int) -> Optional[Transaction]:
        with self._get_connection() as conn:
            row = conn.execute(
                f"{_SELECT_WITH_NAMES} WHERE t.id = ?", (txn_id,)
            ).fetchone()
            return Transaction.from_row(row) if row else None

    def list_by_business(
        self,
        business_id: int,
        month: Optional[int] = None,
        year: Optional[int] = None,
        limit: int = TRANSACTION_LIST_LIMIT,
    ) -> list[Transaction]:
        """
        Newest transactions of a business.

        Args:
            business_id: Owning business
            month: Calendar month (1-12); only applied together with year
            year: Calendar year; only applied together with month
            limit: Maximum number of rows

        Returns:
            Transactions ordered by date then id, newest first
        """
        query = f"{_SELECT_WITH_NAMES} WHERE t.business_id = ?"
        params: list = [business_id]

        window = parse_month_filter(month, year)
        if window:
            query += " AND t.date >= ? AND t.date < ?"
            params.extend(window)

        query += " ORDER BY t.date DESC, t.id DESC LIMIT ?"
        params.append(limit)

        with self._get_connection() as conn:
            cursor = conn.execute(query, params)
            return [Transaction.from_row(row) for row in cursor.fetchall()]

    # =========================================================================
    # Update / Delete Operations
    # =========================================================================

    def update(self, txn: TransactionInput) -> Transaction:
        columns = self._columns(txn)
        columns.pop("business_id")
        with self._get_connection() as conn:
            if not self._update_fields(conn, "transactions", txn.id, columns):
                raise NotFoundError("Transaction", txn.id)
            row = conn.execute(
                f"{_SELECT_WITH_NAMES} WHERE t.id = ?", (txn.id,)
            ).fetchone()

        logger.info(f"Updated transaction {txn.id}")
        return Transaction.from_row(row)

    def delete(self, txn_id: int) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM transactions WHERE id = ?", (txn_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted transaction {txn_id}")
        return deleted

    @staticmethod
    def _columns(txn: TransactionInput) -> dict:
        return {
            "business_id": txn.business_id,
            "date": iso_date(txn.date),
            "description": txn.description,
            "amount": txn.amount,
            "type": txn.type.value,
            "account_id": txn.account_id,
            "client_id": txn.client_id,
        }
