"""
Client and business operations.

Handles the business profile, client CRUD and the per-client activity log.
"""

import logging

from bizdesk.errors import NotFoundError
from bizdesk.models import BusinessInput, ClientInput

from .base import HandlerGroup, operation, payload_id, rows

logger = logging.getLogger(__name__)


class ClientsHandler(HandlerGroup):
    """Operations for the business profile and its clients."""

    # =========================================================================
    # Business
    # =========================================================================

    @operation("get-business", "business-data")
    def get_business(self, payload):
        business = self.repository.businesses.get_by_id(payload_id(payload))
        if business is None:
            raise NotFoundError("Business", payload_id(payload))
        return business.to_dict()

    @operation("update-business", "business-updated")
    def update_business(self, payload):
        business = BusinessInput.from_payload(payload, require_id=True)
        return self.repository.businesses.update(business).to_dict()

    # =========================================================================
    # Clients
    # =========================================================================

    @operation("save-client", "client-saved")
    def save_client(self, payload):
        client = self.repository.clients.create(ClientInput.from_payload(payload))
        return client.to_dict()

    @operation("get-clients", "clients-data")
    def get_clients(self, payload):
        business_id = payload_id(payload, "business_id")
        return rows(self.repository.clients.list_by_business(business_id))

    @operation("get-client-by-id", "client-data")
    def get_client_by_id(self, payload):
        return self._get_client(payload_id(payload))

    @operation("get-client-by-id-for-docs", "client-data-for-docs")
    def get_client_by_id_for_docs(self, payload):
        return self._get_client(payload_id(payload))

    @operation("update-client", "client-updated")
    def update_client(self, payload):
        client = ClientInput.from_payload(payload, require_id=True)
        return self.repository.clients.update(client).to_dict()

    @operation("delete-client", "client-deleted")
    def delete_client(self, payload):
        client_id = payload_id(payload)
        deleted = self.repository.clients.delete(client_id)
        if not deleted:
            logger.debug(f"delete-client: no client {client_id}")
        return {"id": client_id, "deleted": deleted}

    @operation("get-client-activities", "client-activities-data")
    def get_client_activities(self, payload):
        return rows(self.repository.clients.get_activities(payload_id(payload)))

    def _get_client(self, client_id: int) -> dict:
        client = self.repository.clients.get_by_id(client_id)
        if client is None:
            raise NotFoundError("Client", client_id)
        return client.to_dict()
