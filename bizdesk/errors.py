"""
Exception types raised by the bizdesk data layer.

The bridge turns every one of these into an error response; nothing here
is meant to reach the UI as an uncaught fault.
"""


class BizdeskError(Exception):
    """Base class for application errors."""


class ValidationError(BizdeskError, ValueError):
    """Input failed validation before any statement was issued."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class NotFoundError(BizdeskError, LookupError):
    """A record required by an operation does not exist."""

    def __init__(self, entity: str, record_id):
        super().__init__(f"{entity} {record_id} not found")
        self.entity = entity
        self.record_id = record_id


class DatabaseUnavailableError(BizdeskError):
    """The database is closed or being swapped out."""


class BackupError(BizdeskError):
    """Backup or restore of the database file failed."""
