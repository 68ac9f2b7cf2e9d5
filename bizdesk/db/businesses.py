"""
Businesses repository module.

The business row is the root every other entity hangs off. A fresh database
holds exactly one, seeded by the schema manager.
"""

import logging
from typing import Optional

from bizdesk.errors import NotFoundError
from bizdesk.models.crm import BusinessInput

from .base import BaseRepository
from .models import Business

logger = logging.getLogger(__name__)


class BusinessRepository(BaseRepository):
    """Repository for the business (tenant) rows."""

    def get_first(self) -> Optional[Business]:
        """The business the UI opens on start."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM businesses ORDER BY id ASC LIMIT 1"
            ).fetchone()
            return Business.from_row(row) if row else None

    def get_by_id(self, business_id: int) -> Optional[Business]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM businesses WHERE id = ?", (business_id,)
            ).fetchone()
            return Business.from_row(row) if row else None

    def list_all(self) -> list[Business]:
        with self._get_connection() as conn:
            cursor = conn.execute("SELECT * FROM businesses ORDER BY id ASC")
            return [Business.from_row(row) for row in cursor.fetchall()]

    def update(self, business: BusinessInput) -> Business:
        """Rename a business or change its currency."""
        with self._get_connection() as conn:
            updated = self._update_fields(
                conn,
                "businesses",
                business.id,
                {"name": business.name, "currency": business.currency},
            )
            if not updated:
                raise NotFoundError("Business", business.id)
            row = conn.execute(
                "SELECT * FROM businesses WHERE id = ?", (business.id,)
            ).fetchone()

        logger.info(f"Updated business {business.id}")
        return Business.from_row(row)
