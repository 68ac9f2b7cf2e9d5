"""
Clients repository module.

Handles client CRUD together with the client activity log. Every create and
update writes its log line inside the same transaction as the client row, so
either both are stored or neither is.
"""

import logging
from typing import Optional

from bizdesk.errors import NotFoundError
from bizdesk.models.crm import ClientInput

from .base import BaseRepository
from .models import Activity, Client

logger = logging.getLogger(__name__)


class ClientRepository(BaseRepository):
    """Repository for clients and their activity log."""

    # =========================================================================
    # Read Operations
    # =========================================================================

    def list_by_business(self, business_id: int) -> list[Client]:
        """All clients of a business, newest first."""
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT * FROM clients
                WHERE business_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (business_id,),
            )
            return [Client.from_row(row) for row in cursor.fetchall()]

    def get_by_id(self, client_id: int) -> Optional[Client]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM clients WHERE id = ?", (client_id,)
            ).fetchone()
            return Client.from_row(row) if row else None

    def get_activities(self, client_id: int) -> list[Activity]:
        """Activity log of a client, newest first."""
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT id, action, created_at FROM client_activities
                WHERE client_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (client_id,),
            )
            return [Activity.from_row(row) for row in cursor.fetchall()]

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, client: ClientInput) -> Client:
        """
        Insert a client and log "Client created".

        Args:
            client: Validated client fields

        Returns:
            The stored Client
        """
        with self._get_connection() as conn:
            client_id = self._insert(
                conn,
                "clients",
                {
                    "business_id": client.business_id,
                    "name": client.name,
                    "email": client.email,
                    "phone": client.phone,
                    "notes": client.notes,
                },
            )
            self._log(conn, client_id, "Client created")
            row = conn.execute(
                "SELECT * FROM clients WHERE id = ?", (client_id,)
            ).fetchone()

        logger.info(f"Created client {client_id} for business {client.business_id}")
        return Client.from_row(row)

    def update(self, client: ClientInput) -> Client:
        """
        Update a client's contact details and log "Client updated".

        Raises:
            NotFoundError: If the client does not exist
        """
        with self._get_connection() as conn:
            updated = self._update_fields(
                conn,
                "clients",
                client.id,
                {
                    "name": client.name,
                    "email": client.email,
                    "phone": client.phone,
                    "notes": client.notes,
                },
            )
            if not updated:
                raise NotFoundError("Client", client.id)
            self._log(conn, client.id, "Client updated")
            row = conn.execute(
                "SELECT * FROM clients WHERE id = ?", (client.id,)
            ).fetchone()

        logger.info(f"Updated client {client.id}")
        return Client.from_row(row)

    def delete(self, client_id: int) -> bool:
        """
        Delete a client.

        Documents, tasks, content and the activity log cascade. A client that
        still has invoices cannot be deleted (foreign key violation).
        """
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM clients WHERE id = ?", (client_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted client {client_id}")
        return deleted

    @staticmethod
    def _log(conn, client_id: int, action: str):
        conn.execute(
            "INSERT INTO client_activities (client_id, action) VALUES (?, ?)",
            (client_id, action),
        )
