"""
Bizdesk - Small Business Back Office

A local data layer for a small agency: clients and leads, bookkeeping,
invoices, compliance documents and a content pipeline, served to a desktop
UI over a named request/response bridge.
"""

from .bridge import Bridge, Request, Response, create_bridge
from .bridge import run as run_bridge
from .db import BackOfficeRepository, get_repository
from .errors import (
    BackupError,
    BizdeskError,
    DatabaseUnavailableError,
    NotFoundError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "BackOfficeRepository",
    "BackupError",
    "BizdeskError",
    "Bridge",
    "DatabaseUnavailableError",
    "NotFoundError",
    "Request",
    "Response",
    "ValidationError",
    "create_bridge",
    "get_repository",
    "run_bridge",
]
