from datetime import date

import pytest

from bizdesk.errors import ValidationError
from bizdesk.models import (
    AccountType,
    ClientInput,
    ContentItemInput,
    InvoiceInput,
    LeadInput,
    ProductInput,
    TransactionInput,
    TransactionType,
)


class TestClientInput:
    def test_strips_and_keeps_optional_fields(self):
        client = ClientInput.from_payload(
            {"business_id": "3", "name": "  Acme  ", "email": ""}
        )
        assert client.business_id == 3
        assert client.name == "Acme"
        assert client.email is None

    def test_name_is_required(self):
        with pytest.raises(ValidationError) as exc:
            ClientInput.from_payload({"business_id": 1, "name": "   "})
        assert exc.value.field == "name"

    def test_update_requires_id_but_not_business(self):
        client = ClientInput.from_payload({"id": 7, "name": "Acme"}, require_id=True)
        assert client.id == 7
        with pytest.raises(ValidationError):
            ClientInput.from_payload({"name": "Acme"}, require_id=True)

    def test_payload_must_be_an_object(self):
        with pytest.raises(ValidationError):
            ClientInput.from_payload(["Acme"])


class TestLeadInput:
    def test_status_normalised_and_forecast(self):
        lead = LeadInput.from_payload(
            {
                "business_id": 1,
                "name": "Prospect",
                "status": "proposal",
                "expected_value": "1000",
                "probability": 40,
            }
        )
        assert lead.status == "Proposal"
        assert lead.forecast == 400

    @pytest.mark.parametrize("probability", [-1, 101, 12.5, "lots"])
    def test_probability_range(self, probability):
        with pytest.raises(ValidationError) as exc:
            LeadInput.from_payload(
                {"business_id": 1, "name": "P", "probability": probability}
            )
        assert exc.value.field == "probability"

    def test_defaults(self):
        lead = LeadInput.from_payload({"business_id": 1, "name": "P"})
        assert lead.status == "New"
        assert lead.expected_value == 0
        assert lead.probability == 0


class TestTransactionInput:
    def test_valid(self):
        txn = TransactionInput.from_payload(
            {
                "business_id": 1,
                "date": "2024-02-29",
                "description": "Rent",
                "amount": 1200,
                "type": "expense",
            }
        )
        assert txn.type == TransactionType.EXPENSE
        assert txn.amount == 1200.0

    @pytest.mark.parametrize(
        "field,value",
        [
            ("date", "2024-02-30"),
            ("date", "29/02/2024"),
            ("amount", -5),
            ("amount", None),
            ("amount", "inf"),
            ("amount", float("nan")),
            ("type", "Transfer"),
        ],
    )
    def test_rejects_bad_values(self, field, value):
        payload = {
            "business_id": 1,
            "date": "2024-01-01",
            "description": "x",
            "amount": 10,
            "type": "Income",
        }
        payload[field] = value
        with pytest.raises(ValidationError) as exc:
            TransactionInput.from_payload(payload)
        assert exc.value.field == field


class TestInvoiceInput:
    def _payload(self, **overrides):
        payload = {
            "business_id": 1,
            "client_id": 2,
            "invoice_number": "INV-9",
            "date": "2024-03-01",
            "items": [
                {"description": "A", "quantity": 3, "unit_price": 10},
                {"description": "B", "quantity": 0.5, "unit_price": 100},
            ],
        }
        payload.update(overrides)
        return payload

    def test_total_ignores_client_supplied_value(self):
        invoice = InvoiceInput.from_payload(self._payload(total_amount=1))
        assert invoice.total_amount == 80

    def test_items_required(self):
        with pytest.raises(ValidationError) as exc:
            InvoiceInput.from_payload(self._payload(items=[]))
        assert exc.value.field == "items"

    def test_item_description_required(self):
        with pytest.raises(ValidationError) as exc:
            InvoiceInput.from_payload(self._payload(items=[{"quantity": 1}]))
        assert exc.value.field == "description"

    def test_due_date_not_before_date(self):
        with pytest.raises(ValidationError) as exc:
            InvoiceInput.from_payload(self._payload(due_date="2024-02-01"))
        assert exc.value.field == "due_date"


def test_product_business_only_required_on_insert():
    product = ProductInput.from_payload({"id": 4, "name": "Retainer", "price": 500})
    assert product.business_id is None
    with pytest.raises(ValidationError):
        ProductInput.from_payload({"name": "Retainer"})


def test_content_status_uppercased():
    item = ContentItemInput.from_payload(
        {"client_id": 1, "platform": "Instagram", "title": "Launch", "status": "draft"}
    )
    assert item.status == "DRAFT"


def test_account_type_enum_values():
    assert [t.value for t in AccountType] == [
        "Income",
        "Expense",
        "Asset",
        "Liability",
        "Equity",
    ]


def test_enum_labels_match_case_insensitively():
    assert AccountType("income") is AccountType.INCOME
    with pytest.raises(ValueError):
        AccountType("Revenue")


def test_blank_values_fall_back_to_defaults():
    lead = LeadInput.from_payload(
        {"business_id": 1, "name": "P", "status": "  ", "expected_value": "", "probability": None}
    )
    assert lead.status == "New"
    assert lead.expected_value == 0
    assert lead.probability == 0


def test_invoice_dates_are_parsed():
    invoice = InvoiceInput.from_payload(
        {
            "business_id": 1,
            "client_id": 2,
            "invoice_number": "INV-1",
            "date": "2024-03-01",
            "due_date": "2024-03-31",
            "items": [{"description": "A"}],
        }
    )
    assert invoice.date == date(2024, 3, 1)
    assert (invoice.due_date - invoice.date).days == 30
