"""
Leads repository module.

Leads are prospective clients with a probability-weighted expected value.
Creates, updates and status changes are written to the lead activity log in
the same transaction as the lead itself.
"""

import logging
from typing import Optional

from bizdesk.errors import NotFoundError
from bizdesk.models.crm import LeadInput

from .base import BaseRepository
from .models import Activity, Lead

logger = logging.getLogger(__name__)


class LeadRepository(BaseRepository):
    """Repository for the sales lead pipeline."""

    def list_by_business(self, business_id: int) -> list[Lead]:
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT * FROM leads
                WHERE business_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (business_id,),
            )
            return [Lead.from_row(row) for row in cursor.fetchall()]

    def get_by_id(self, lead_id: int) -> Optional[Lead]:
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM leads WHERE id = ?", (lead_id,)).fetchone()
            return Lead.from_row(row) if row else None

    def get_activities(self, lead_id: int) -> list[Activity]:
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT id, action, created_at FROM lead_activities
                WHERE lead_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (lead_id,),
            )
            return [Activity.from_row(row) for row in cursor.fetchall()]

    def create(self, lead: LeadInput) -> Lead:
        """Insert a lead and log "Lead created"."""
        with self._get_connection() as conn:
            lead_id = self._insert(
                conn,
                "leads",
                {"business_id": lead.business_id, **self._columns(lead)},
            )
            self._log(conn, lead_id, "Lead created")
            row = conn.execute("SELECT * FROM leads WHERE id = ?", (lead_id,)).fetchone()

        logger.info(
            f"Created lead {lead_id} ({lead.status}, forecast {lead.forecast:,.2f})"
        )
        return Lead.from_row(row)

    def update(self, lead: LeadInput) -> Lead:
        """
        Replace a lead's fields and return the refreshed row.

        Raises:
            NotFoundError: If the lead does not exist
        """
        with self._get_connection() as conn:
            previous = conn.execute(
                "SELECT status FROM leads WHERE id = ?", (lead.id,)
            ).fetchone()
            if previous is None:
                raise NotFoundError("Lead", lead.id)

            self._update_fields(conn, "leads", lead.id, self._columns(lead))
            self._log(conn, lead.id, "Lead updated")
            if previous["status"] != lead.status:
                self._log(conn, lead.id, f"Status changed to {lead.status}")

            row = conn.execute("SELECT * FROM leads WHERE id = ?", (lead.id,)).fetchone()

        logger.info(f"Updated lead {lead.id}")
        return Lead.from_row(row)

    def delete(self, lead_id: int) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM leads WHERE id = ?", (lead_id,))
            return cursor.rowcount > 0

    @staticmethod
    def _columns(lead: LeadInput) -> dict:
        return {
            "name": lead.name,
            "email": lead.email,
            "phone": lead.phone,
            "notes": lead.notes,
            "status": lead.status,
            "expected_value": lead.expected_value,
            "probability": lead.probability,
        }

    @staticmethod
    def _log(conn, lead_id: int, action: str):
        conn.execute(
            "INSERT INTO lead_activities (lead_id, action) VALUES (?, ?)",
            (lead_id, action),
        )
