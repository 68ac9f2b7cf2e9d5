"""
Invoices repository module.

Invoices are the only multi-statement flows in the data layer:
- Saving writes the header and every line item in one transaction
- Deleting removes the line items and the header in one transaction
- Marking paid updates the status and books the matching income
  transaction in one transaction
"""

import logging
from datetime import date
from typing import Optional

from bizdesk.config import SALES_ACCOUNT_NAME
from bizdesk.errors import NotFoundError, ValidationError
from bizdesk.models.account import TransactionType
from bizdesk.models.invoice import InvoiceInput, InvoiceStatus

from .base import BaseRepository
from .dates import iso_date
from .models import Invoice, InvoiceItem, Transaction

logger = logging.getLogger(__name__)


class InvoiceRepository(BaseRepository):
    """Repository for invoices and their line items."""

    # =========================================================================
    # Read Operations
    # =========================================================================

    def list_by_business(self, business_id: int) -> list[Invoice]:
        """Invoice headers with client names, newest first."""
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT i.*, c.name AS client_name
                FROM invoices i
                JOIN clients c ON i.client_id = c.id
                WHERE i.business_id = ?
                ORDER BY i.date DESC, i.id DESC
                """,
                (business_id,),
            )
            return [Invoice.from_row(row) for row in cursor.fetchall()]

    def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        """An invoice header together with its line items."""
        with self._get_connection() as conn:
            row = conn.execute(
                """
                SELECT i.*, c.name AS client_name
                FROM invoices i
                LEFT JOIN clients c ON i.client_id = c.id
                WHERE i.id = ?
                """,
                (invoice_id,),
            ).fetchone()
            if not row:
                return None
            invoice = Invoice.from_row(row)
            invoice.items = self._fetch_items(conn, invoice_id)
            return invoice

    def get_items(self, invoice_id: int) -> list[InvoiceItem]:
        with self._get_connection() as conn:
            return self._fetch_items(conn, invoice_id)

    @staticmethod
    def _fetch_items(conn, invoice_id: int) -> list[InvoiceItem]:
        cursor = conn.execute(
            "SELECT * FROM invoice_items WHERE invoice_id = ? ORDER BY id ASC",
            (invoice_id,),
        )
        return [InvoiceItem.from_row(row) for row in cursor.fetchall()]

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, invoice: InvoiceInput) -> Invoice:
        """
        Save an invoice header and all of its line items atomically.

        The stored total is recomputed from the items. If any item fails to
        insert, the header insert is rolled back too.

        Args:
            invoice: Validated invoice with at least one item

        Returns:
            The stored Invoice including its items
        """
        total_amount = invoice.total_amount

        with self._get_connection() as conn:
            invoice_id = self._insert(
                conn,
                "invoices",
                {
                    "business_id": invoice.business_id,
                    "client_id": invoice.client_id,
                    "invoice_number": invoice.invoice_number,
                    "date": iso_date(invoice.date),
                    "due_date": iso_date(invoice.due_date),
                    "status": invoice.status.value,
                    "total_amount": total_amount,
                    "notes": invoice.notes,
                },
            )
            conn.executemany(
                """
                INSERT INTO invoice_items
                    (invoice_id, description, quantity, unit_price, amount)
                VALUES (?, ?, ?, ?, ?)
                """,
                [
                    (
                        invoice_id,
                        item.description,
                        item.quantity,
                        item.unit_price,
                        item.amount,
                    )
                    for item in invoice.items
                ],
            )
            row = conn.execute(
                "SELECT * FROM invoices WHERE id = ?", (invoice_id,)
            ).fetchone()
            stored = Invoice.from_row(row)
            stored.items = self._fetch_items(conn, invoice_id)

        logger.info(
            f"Saved invoice {invoice.invoice_number} (id {invoice_id}) with "
            f"{len(invoice.items)} items, total {total_amount:,.2f}"
        )
        return stored

    def delete(self, invoice_id: int) -> bool:
        """Delete the line items, then the header, atomically."""
        with self._get_connection() as conn:
            conn.execute("DELETE FROM invoice_items WHERE invoice_id = ?", (invoice_id,))
            cursor = conn.execute("DELETE FROM invoices WHERE id = ?", (invoice_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted invoice {invoice_id}")
        return deleted

    def update_status(self, invoice_id: int, status: InvoiceStatus) -> Invoice:
        """
        Move an invoice to Draft, Sent or Void.

        Paid is reached only through mark_paid, which also books the income.
        """
        if status == InvoiceStatus.PAID:
            raise ValidationError("Use mark_paid to record a payment", field="status")

        with self._get_connection() as conn:
            if not self._update_fields(
                conn, "invoices", invoice_id, {"status": status.value}
            ):
                raise NotFoundError("Invoice", invoice_id)

        logger.info(f"Invoice {invoice_id} status set to {status.value}")
        return self.get_by_id(invoice_id)

    def mark_paid(self, invoice_id: int, paid_on: Optional[date] = None) -> Transaction:
        """
        Mark an invoice paid and book the payment as income.

        The status change and the income transaction are written in one
        transaction. The income is posted to the business's "Sales" account;
        when no such account exists it is booked with no account.

        Args:
            invoice_id: Invoice to settle
            paid_on: Payment date, defaults to today

        Returns:
            The income Transaction that was created

        Raises:
            NotFoundError: If the invoice does not exist
            ValidationError: If the invoice is already paid or void
        """
        paid_on = paid_on or date.today()

        with self._get_connection() as conn:
            invoice = conn.execute(
                "SELECT * FROM invoices WHERE id = ?", (invoice_id,)
            ).fetchone()
            if invoice is None:
                raise NotFoundError("Invoice", invoice_id)
            if invoice["status"] == InvoiceStatus.PAID.value:
                raise ValidationError(f"Invoice {invoice['invoice_number']} is already paid")
            if invoice["status"] == InvoiceStatus.VOID.value:
                raise ValidationError(f"Invoice {invoice['invoice_number']} is void")

            conn.execute(
                "UPDATE invoices SET status = ? WHERE id = ?",
                (InvoiceStatus.PAID.value, invoice_id),
            )

            account = conn.execute(
                """
                SELECT id FROM accounts
                WHERE name = ? AND business_id = ?
                ORDER BY id ASC LIMIT 1
                """,
                (SALES_ACCOUNT_NAME, invoice["business_id"]),
            ).fetchone()
            account_id = account["id"] if account else None
            if account_id is None:
                logger.warning(
                    f"No '{SALES_ACCOUNT_NAME}' account for business "
                    f"{invoice['business_id']}; booking invoice {invoice_id} "
                    f"payment without an account"
                )

            txn_id = self._insert(
                conn,
                "transactions",
                {
                    "business_id": invoice["business_id"],
                    "date": paid_on.isoformat(),
                    "description": f"Invoice Payment: {invoice['invoice_number']}",
                    "amount": invoice["total_amount"],
                    "type": TransactionType.INCOME.value,
                    "account_id": account_id,
                    "client_id": invoice["client_id"],
                },
            )
            row = conn.execute(
                """
                SELECT t.*, a.name AS account_name, c.name AS client_name
                FROM transactions t
                LEFT JOIN accounts a ON t.account_id = a.id
                LEFT JOIN clients c ON t.client_id = c.id
                WHERE t.id = ?
                """,
                (txn_id,),
            ).fetchone()

        logger.info(
            f"Invoice {invoice_id} marked paid; income transaction {txn_id} "
            f"of {invoice['total_amount']:,.2f} booked"
        )
        return Transaction.from_row(row)
