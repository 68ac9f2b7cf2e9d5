"""
Backup service for the database file.

Backups copy the live file while no operation is running. Restores check
and migrate a staged copy first, so an older backup picks up any columns
added since it was taken, then swap it into place.
"""

import logging
import os
import shutil
import sqlite3
from pathlib import Path

from bizdesk.db import BackOfficeRepository
from bizdesk.errors import BackupError

logger = logging.getLogger(__name__)


class BackupService:
    """Copies the database file out and swaps backups back in."""

    def __init__(self, repository: BackOfficeRepository):
        self.repository = repository

    @property
    def manager(self):
        return self.repository.manager

    def backup(self, destination) -> Path:
        """
        Copy the database file to destination.

        Args:
            destination: Target file path; parent directories are created

        Returns:
            The path written

        Raises:
            BackupError: If the copy fails
        """
        destination = Path(destination)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with self.manager.exclusive():
                shutil.copy2(self.manager.db_path, destination)
        except OSError as e:
            logger.error(f"Backup to {destination} failed: {e}", exc_info=True)
            raise BackupError(f"Backup failed: {e}") from e

        logger.info(f"Database backed up to {destination}")
        return destination

    def restore(self, source) -> list[str]:
        """
        Replace the live database with the file at source.

        The backup is copied next to the live file, checked, and brought up
        to the current schema there. Only a fully prepared copy replaces the
        live file; if any step fails the original database is left in place
        and reopened.

        Args:
            source: Path of a database file produced by backup()

        Returns:
            Column migrations applied to the restored file

        Raises:
            BackupError: If the file is missing, not a database, or the swap fails
        """
        source = Path(source)
        if not source.is_file():
            raise BackupError(f"Backup file not found: {source}")

        applied: list[str] = []

        def replace(target: Path):
            staging = target.with_name(f"{target.name}.restoring")
            try:
                shutil.copy2(source, staging)
                _check_database(staging)
                applied.extend(self._migrate(staging))
                os.replace(staging, target)
            except (OSError, sqlite3.Error) as e:
                staging.unlink(missing_ok=True)
                raise BackupError(f"Restore failed: {e}") from e

        try:
            self.manager.swap(replace)
        except BackupError:
            logger.error(f"Restore from {source} failed", exc_info=True)
            raise

        logger.info(f"Database restored from {source}")
        return applied

    def _migrate(self, path: Path) -> list[str]:
        """Run the schema step on a staged copy and commit it."""
        conn = self.manager.connect(path)
        try:
            applied = self.repository.schema.apply(conn)
            conn.commit()
            return applied
        finally:
            conn.close()


def _check_database(path: Path):
    """Raise sqlite3.DatabaseError unless path is an intact SQLite file."""
    conn = sqlite3.connect(path)
    try:
        result = conn.execute("PRAGMA integrity_check").fetchone()
        if not result or result[0] != "ok":
            raise sqlite3.DatabaseError(f"integrity check failed: {result}")
        tables = conn.execute(
            "SELECT COUNT(*) FROM sqlite_master WHERE type = 'table' AND name = 'businesses'"
        ).fetchone()[0]
        if not tables:
            raise sqlite3.DatabaseError("not a bizdesk database (no businesses table)")
    finally:
        conn.close()
