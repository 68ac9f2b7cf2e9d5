import sqlite3
from datetime import date

import pytest

from bizdesk.errors import NotFoundError, ValidationError
from bizdesk.models import InvoiceInput, InvoiceItemInput, InvoiceStatus


def count_rows(repository, table, invoice_id):
    column = "invoice_id" if table == "invoice_items" else "id"
    with repository.manager.connection() as conn:
        return conn.execute(
            f"SELECT COUNT(*) FROM {table} WHERE {column} = ?", (invoice_id,)
        ).fetchone()[0]


def test_total_is_recomputed_from_items(make_invoice):
    invoice = make_invoice(total_amount=9999)
    assert invoice.total_amount == 125
    assert [item.amount for item in invoice.items] == [100, 25]
    assert invoice.status == "Draft"


def test_save_then_delete_leaves_no_rows(repository, make_invoice):
    invoice = make_invoice()
    assert count_rows(repository, "invoices", invoice.id) == 1
    assert count_rows(repository, "invoice_items", invoice.id) == 2

    assert repository.invoices.delete(invoice.id) is True
    assert count_rows(repository, "invoices", invoice.id) == 0
    assert count_rows(repository, "invoice_items", invoice.id) == 0


def test_failed_item_insert_rolls_back_header(repository, business_id, client):
    broken = InvoiceInput(
        business_id=business_id,
        client_id=client.id,
        invoice_number="INV-BROKEN",
        date="2024-03-01",
        items=[
            InvoiceItemInput(description="Fine", quantity=1, unit_price=10),
            # Skips validation so the NOT NULL constraint fires mid-insert
            InvoiceItemInput.model_construct(description=None, quantity=1, unit_price=10),
        ],
    )
    with pytest.raises(sqlite3.IntegrityError):
        repository.invoices.create(broken)

    with repository.manager.connection() as conn:
        assert conn.execute("SELECT COUNT(*) FROM invoices").fetchone()[0] == 0
        assert conn.execute("SELECT COUNT(*) FROM invoice_items").fetchone()[0] == 0


def test_list_is_header_with_client_name(repository, business_id, make_invoice):
    make_invoice("INV-001", date="2024-01-10")
    newer = make_invoice("INV-002", date="2024-02-10")
    invoices = repository.invoices.list_by_business(business_id)
    assert [i.id for i in invoices][0] == newer.id
    assert invoices[0].client_name == "Acme Corp"


def test_mark_paid_books_income_for_today(repository, business_id, client, make_invoice):
    invoice = make_invoice()
    txn = repository.invoices.mark_paid(invoice.id)

    assert repository.invoices.get_by_id(invoice.id).status == "Paid"
    assert txn.type == "Income"
    assert txn.amount == invoice.total_amount
    assert txn.date == date.today().isoformat()
    assert txn.description == "Invoice Payment: INV-001"
    assert txn.account_name == "Sales"
    assert txn.client_id == client.id

    income = [
        t for t in repository.transactions.list_by_business(business_id)
        if t.type == "Income"
    ]
    assert len(income) == 1


def test_mark_paid_twice_is_rejected(repository, business_id, make_invoice):
    invoice = make_invoice()
    repository.invoices.mark_paid(invoice.id)
    with pytest.raises(ValidationError):
        repository.invoices.mark_paid(invoice.id)
    assert len(repository.transactions.list_by_business(business_id)) == 1


def test_failed_income_insert_leaves_invoice_unpaid(repository, business_id, make_invoice):
    invoice = make_invoice()
    with repository.manager.connection() as conn:
        conn.execute(
            """
            CREATE TRIGGER block_income BEFORE INSERT ON transactions
            BEGIN
                SELECT RAISE(ABORT, 'ledger locked');
            END
            """
        )

    with pytest.raises(sqlite3.IntegrityError):
        repository.invoices.mark_paid(invoice.id)

    assert repository.invoices.get_by_id(invoice.id).status == "Draft"
    assert repository.transactions.list_by_business(business_id) == []


def test_mark_paid_void_invoice_is_rejected(repository, business_id, make_invoice):
    invoice = make_invoice()
    repository.invoices.update_status(invoice.id, InvoiceStatus.VOID)

    with pytest.raises(ValidationError):
        repository.invoices.mark_paid(invoice.id)
    assert repository.invoices.get_by_id(invoice.id).status == "Void"
    assert repository.transactions.list_by_business(business_id) == []


def test_mark_paid_missing_invoice(repository):
    with pytest.raises(NotFoundError):
        repository.invoices.mark_paid(404)


def test_mark_paid_without_sales_account(repository, business_id, make_invoice):
    sales = repository.accounts.get_by_name(business_id, "Sales")
    repository.accounts.delete(sales.id)
    invoice = make_invoice()

    txn = repository.invoices.mark_paid(invoice.id, paid_on=date(2024, 3, 20))
    assert txn.account_id is None
    assert txn.date == "2024-03-20"


def test_update_status(repository, make_invoice):
    invoice = make_invoice()
    assert repository.invoices.update_status(invoice.id, InvoiceStatus.SENT).status == "Sent"
    with pytest.raises(ValidationError):
        repository.invoices.update_status(invoice.id, InvoiceStatus.PAID)
    with pytest.raises(NotFoundError):
        repository.invoices.update_status(999, InvoiceStatus.VOID)
