from datetime import date

import pytest

from bizdesk.bridge import create_bridge
from bizdesk.db import BackOfficeRepository
from bizdesk.models import ClientInput, DocumentInput, InvoiceInput, TransactionInput


@pytest.fixture
def repository(tmp_path):
    """A freshly initialized database per test."""
    repo = BackOfficeRepository(tmp_path / "bizdesk.sqlite")
    yield repo
    if repo.manager.is_open:
        repo.close()


@pytest.fixture
def business_id(repository):
    return repository.businesses.get_first().id


@pytest.fixture
def client(repository, business_id):
    return repository.clients.create(
        ClientInput.from_payload(
            {"business_id": business_id, "name": "Acme Corp", "email": "ops@acme.test"}
        )
    )


@pytest.fixture
def bridge(repository):
    return create_bridge(repository)


@pytest.fixture
def make_invoice(repository, business_id, client):
    def _make(number="INV-001", items=None, **extra):
        payload = {
            "business_id": business_id,
            "client_id": client.id,
            "invoice_number": number,
            "date": "2024-03-01",
            "items": items
            or [
                {"description": "Design", "quantity": 2, "unit_price": 50},
                {"description": "Hosting", "quantity": 1, "unit_price": 25},
            ],
            **extra,
        }
        return repository.invoices.create(InvoiceInput.from_payload(payload))

    return _make


@pytest.fixture
def add_transaction(repository, business_id):
    def _add(amount, type="Expense", on="2024-03-10", account=None, description="Entry"):
        account_id = None
        if account:
            account_id = repository.accounts.get_by_name(business_id, account).id
        return repository.transactions.create(
            TransactionInput.from_payload(
                {
                    "business_id": business_id,
                    "date": on,
                    "description": description,
                    "amount": amount,
                    "type": type,
                    "account_id": account_id,
                }
            )
        )

    return _add


@pytest.fixture
def add_document(repository, business_id):
    def _add(name, expiry=None):
        return repository.documents.create(
            DocumentInput.from_payload(
                {
                    "business_id": business_id,
                    "name": name,
                    "type": "Compliance",
                    "expiry_date": expiry.isoformat() if isinstance(expiry, date) else expiry,
                }
            )
        )

    return _add
