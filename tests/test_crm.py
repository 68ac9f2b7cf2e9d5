import sqlite3

import pytest

from bizdesk.errors import NotFoundError
from bizdesk.models import (
    BusinessInput,
    CaptionInput,
    ClientDocumentInput,
    ClientInput,
    ContentItemInput,
    LeadInput,
    ProductInput,
    TaskInput,
)


class TestClients:
    def test_create_logs_exactly_one_activity(self, repository, client):
        activities = repository.clients.get_activities(client.id)
        assert [a.action for a in activities] == ["Client created"]

    def test_update_logs_activity(self, repository, client):
        updated = repository.clients.update(
            ClientInput.from_payload(
                {"id": client.id, "name": "Acme Ltd", "phone": "555"}, require_id=True
            )
        )
        assert updated.name == "Acme Ltd"
        assert updated.phone == "555"
        actions = [a.action for a in repository.clients.get_activities(client.id)]
        assert sorted(actions) == ["Client created", "Client updated"]

    def test_update_missing_client(self, repository):
        with pytest.raises(NotFoundError):
            repository.clients.update(
                ClientInput.from_payload({"id": 999, "name": "Ghost"}, require_id=True)
            )

    def test_list_newest_first(self, repository, business_id, client):
        second = repository.clients.create(
            ClientInput.from_payload({"business_id": business_id, "name": "Beta"})
        )
        ids = [c.id for c in repository.clients.list_by_business(business_id)]
        assert ids == [second.id, client.id]

    def test_delete_cascades_to_dependants(self, repository, business_id, client):
        repository.tasks.create(
            TaskInput.from_payload(
                {"business_id": business_id, "client_id": client.id, "title": "Call"}
            )
        )
        repository.documents.create_client_document(
            ClientDocumentInput.from_payload({"client_id": client.id, "name": "NDA"})
        )
        repository.content.create(
            ContentItemInput.from_payload(
                {"client_id": client.id, "platform": "LinkedIn", "title": "Post"}
            )
        )

        assert repository.clients.delete(client.id) is True
        assert repository.clients.get_by_id(client.id) is None
        assert repository.clients.get_activities(client.id) == []
        assert repository.tasks.list_for_client(client.id) == []
        assert repository.documents.list_for_client(client.id) == []
        assert repository.content.list_for_client(client.id) == []

    def test_client_with_invoice_cannot_be_deleted(self, repository, client, make_invoice):
        make_invoice()
        with pytest.raises(sqlite3.IntegrityError):
            repository.clients.delete(client.id)
        assert repository.clients.get_by_id(client.id) is not None

    def test_delete_missing_returns_false(self, repository):
        assert repository.clients.delete(12345) is False


class TestLeads:
    def test_update_returns_row_and_logs_status_change(self, repository, business_id):
        lead = repository.leads.create(
            LeadInput.from_payload({"business_id": business_id, "name": "Prospect"})
        )
        updated = repository.leads.update(
            LeadInput.from_payload(
                {
                    "id": lead.id,
                    "name": "Prospect",
                    "status": "Proposal",
                    "expected_value": 5000,
                    "probability": 60,
                },
                require_id=True,
            )
        )
        assert updated.status == "Proposal"
        assert updated.forecast == 3000
        assert updated.business_id == business_id

        actions = {a.action for a in repository.leads.get_activities(lead.id)}
        assert actions == {"Lead created", "Lead updated", "Status changed to Proposal"}

    def test_update_without_status_change_logs_once(self, repository, business_id):
        lead = repository.leads.create(
            LeadInput.from_payload({"business_id": business_id, "name": "P"})
        )
        repository.leads.update(
            LeadInput.from_payload({"id": lead.id, "name": "P2"}, require_id=True)
        )
        actions = [a.action for a in repository.leads.get_activities(lead.id)]
        assert sorted(actions) == ["Lead created", "Lead updated"]

    def test_delete(self, repository, business_id):
        lead = repository.leads.create(
            LeadInput.from_payload({"business_id": business_id, "name": "P"})
        )
        assert repository.leads.delete(lead.id) is True
        assert repository.leads.get_by_id(lead.id) is None


class TestTasks:
    def test_crud_and_status_filter(self, repository, business_id, client):
        task = repository.tasks.create(
            TaskInput.from_payload(
                {
                    "business_id": business_id,
                    "client_id": client.id,
                    "title": "Send proposal",
                    "due_date": "2024-04-01",
                }
            )
        )
        assert task.status == "Pending"

        repository.tasks.update(
            TaskInput.from_payload(
                {"id": task.id, "title": "Send proposal", "status": "Done"},
                require_id=True,
            )
        )
        assert repository.tasks.list_by_business(business_id, status="Pending") == []
        done = repository.tasks.list_by_business(business_id, status="Done")
        assert [t.id for t in done] == [task.id]

        assert repository.tasks.delete(task.id) is True
        assert repository.tasks.get_by_id(task.id) is None


class TestContent:
    def test_status_changes_are_logged(self, repository, client):
        item = repository.content.create(
            ContentItemInput.from_payload(
                {"client_id": client.id, "platform": "Instagram", "title": "Teaser"}
            )
        )
        assert item.status == "IDEA"

        updated = repository.content.update(
            ContentItemInput.from_payload(
                {
                    "id": item.id,
                    "platform": "Instagram",
                    "title": "Teaser",
                    "status": "scheduled",
                    "scheduled_date": "2024-05-01",
                },
                require_id=True,
            )
        )
        assert updated.status == "SCHEDULED"
        assert updated.client_id == client.id

        actions = {a.action for a in repository.content.get_activities(item.id)}
        assert actions == {"Created as IDEA", "Status changed to SCHEDULED"}
        assert repository.content.list_for_client(client.id, status="scheduled")

    def test_shared_and_client_captions(self, repository, client):
        repository.content.create_caption(
            CaptionInput.from_payload({"caption": "Shared hook"})
        )
        own = repository.content.create_caption(
            CaptionInput.from_payload({"client_id": client.id, "caption": "Acme hook"})
        )
        assert [c.caption for c in repository.content.list_captions()] == ["Shared hook"]
        assert [c.id for c in repository.content.list_captions(client.id)] == [own.id]


class TestProducts:
    def test_save_upserts_by_id(self, repository, business_id):
        product = repository.products.save(
            ProductInput.from_payload(
                {"business_id": business_id, "name": "Audit", "price": 900}
            )
        )
        repository.products.save(
            ProductInput.from_payload(
                {"id": product.id, "name": "Audit", "type": "Product", "price": 950}
            )
        )
        products = repository.products.list_by_business(business_id)
        assert len(products) == 1
        assert products[0].price == 950
        assert products[0].type == "Product"

    def test_save_unknown_id(self, repository):
        with pytest.raises(NotFoundError):
            repository.products.save(ProductInput.from_payload({"id": 77, "name": "X"}))


def test_business_update(repository, business_id):
    business = repository.businesses.update(
        BusinessInput.from_payload(
            {"id": business_id, "name": "AgoraX Studio", "currency": "eur"},
            require_id=True,
        )
    )
    assert business.name == "AgoraX Studio"
    assert business.currency == "EUR"
