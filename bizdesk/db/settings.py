"""
Settings repository module.

A process-wide key/value store. Saving a key replaces any previous value,
so each key appears at most once.
"""

import logging
from typing import Any, Optional

from bizdesk.errors import ValidationError

from .base import BaseRepository

logger = logging.getLogger(__name__)


class SettingsRepository(BaseRepository):
    """Repository for application settings."""

    def get_all(self) -> dict[str, Optional[str]]:
        with self._get_connection() as conn:
            cursor = conn.execute("SELECT key, value FROM settings ORDER BY key")
            return {row["key"]: row["value"] for row in cursor.fetchall()}

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM settings WHERE key = ?", (key,)
            ).fetchone()
            return row["value"] if row else default

    def save(self, settings: dict[str, Any]) -> dict[str, Optional[str]]:
        """
        Upsert every key of the mapping in one transaction.

        Values are stored as text; None is stored as NULL.

        Returns:
            The full settings map after the save
        """
        if not isinstance(settings, dict):
            raise ValidationError("settings payload must be an object")
        for key in settings:
            if not isinstance(key, str) or not key.strip():
                raise ValidationError(f"Invalid settings key: {key!r}")

        with self._get_connection() as conn:
            conn.executemany(
                "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                [
                    (key.strip(), None if value is None else str(value))
                    for key, value in settings.items()
                ],
            )

        logger.info(f"Saved {len(settings)} settings: {', '.join(sorted(settings))}")
        return self.get_all()
