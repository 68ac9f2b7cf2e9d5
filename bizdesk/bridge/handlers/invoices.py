"""
Invoice operations.

Saving writes the header and its line items atomically; marking an invoice
paid also books the payment as income.
"""

import logging

from bizdesk.errors import NotFoundError
from bizdesk.models import InvoiceInput, InvoiceStatusRequest, PaymentRequest

from .base import HandlerGroup, operation, payload_id, rows

logger = logging.getLogger(__name__)


class InvoicesHandler(HandlerGroup):
    """Operations for invoices and their line items."""

    @operation("get-invoices", "invoices-data")
    def get_invoices(self, payload):
        business_id = payload_id(payload, "business_id")
        invoices = self.repository.invoices.list_by_business(business_id)
        # Listing is header-only
        return [
            {k: v for k, v in invoice.to_dict().items() if k != "items"}
            for invoice in invoices
        ]

    @operation("save-invoice", "invoice-saved", error_reply="invoice-save-error")
    def save_invoice(self, payload):
        """Create an invoice; any client-supplied total is ignored."""
        invoice = self.repository.invoices.create(InvoiceInput.from_payload(payload))
        return invoice.to_dict()

    @operation("get-invoice-by-id", "invoice-data")
    def get_invoice_by_id(self, payload):
        invoice_id = payload_id(payload)
        invoice = self.repository.invoices.get_by_id(invoice_id)
        if invoice is None:
            raise NotFoundError("Invoice", invoice_id)
        return invoice.to_dict()

    @operation("get-invoice-details", "invoice-details-data")
    def get_invoice_details(self, payload):
        invoice_id = payload_id(payload)
        return {
            "invoiceId": invoice_id,
            "items": rows(self.repository.invoices.get_items(invoice_id)),
        }

    @operation("delete-invoice", "invoice-deleted")
    def delete_invoice(self, payload):
        invoice_id = payload_id(payload)
        return {"id": invoice_id, "deleted": self.repository.invoices.delete(invoice_id)}

    @operation("update-invoice-status", "invoice-status-updated")
    def update_invoice_status(self, payload):
        request = InvoiceStatusRequest.from_payload(payload)
        return self.repository.invoices.update_status(request.id, request.status).to_dict()

    @operation("mark-invoice-paid", "invoice-paid-success")
    def mark_invoice_paid(self, payload):
        """Returns the income transaction booked for the payment."""
        if isinstance(payload, dict):
            request = PaymentRequest.from_payload(payload)
        else:
            request = PaymentRequest(id=payload_id(payload))
        invoice_id = request.id

        txn = self.repository.invoices.mark_paid(invoice_id, paid_on=request.paid_on)
        logger.info(f"Invoice {invoice_id} paid via bridge, transaction {txn.id}")
        return {"invoiceId": invoice_id, "transaction": txn.to_dict()}
