"""
Bridge between the UI and the bizdesk data layer.

Handler groups register named operations; ``dispatch`` runs the matching
handler off the event loop and always answers with a Response, turning
every failure into an error payload.
"""

import asyncio
import logging
import sqlite3
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from bizdesk.config import ERROR_MESSAGES
from bizdesk.db import BackOfficeRepository, get_repository
from bizdesk.errors import (
    BackupError,
    DatabaseUnavailableError,
    NotFoundError,
    ValidationError,
)
from bizdesk.models import validation_error
from bizdesk.services import BackupService, ChartService, ExportService

from .handlers import (
    AccountingHandler,
    ClientsHandler,
    ContentHandler,
    DocumentsHandler,
    HandlerGroup,
    InventoryHandler,
    InvoicesHandler,
    LeadsHandler,
    MaintenanceHandler,
    ReportsHandler,
    SettingsHandler,
    TasksHandler,
)
from .protocol import Request, Response

logger = logging.getLogger(__name__)


class Bridge:
    """Dispatches UI requests to handler groups."""

    def __init__(self, repository: Optional[BackOfficeRepository] = None):
        self._operations: dict[str, tuple[str, str, object]] = {}
        self.handlers: dict[str, HandlerGroup] = {}
        self._startup_pushed = False

        try:
            self.repository = repository or get_repository()
            logger.info(f"Repository initialized: {self.repository.db_path}")

            self.backup_service = BackupService(self.repository)
            logger.info("Backup service initialized")

            self.export_service = ExportService(self.repository)
            logger.info("Export service initialized")

            self.chart_service = ChartService(self.repository)
            logger.info("Chart service initialized")
        except Exception as e:
            logger.error(f"Failed to initialize bridge services: {e}", exc_info=True)
            raise

    def setup(self):
        """Register every handler group."""
        for handler in (
            ClientsHandler(self.repository),
            LeadsHandler(self.repository),
            TasksHandler(self.repository),
            AccountingHandler(self.repository),
            ReportsHandler(self.repository),
            DocumentsHandler(self.repository),
            InvoicesHandler(self.repository),
            InventoryHandler(self.repository),
            ContentHandler(self.repository),
            SettingsHandler(self.repository),
            MaintenanceHandler(
                self.repository,
                self.backup_service,
                self.export_service,
                self.chart_service,
            ),
        ):
            self.add_handler(handler)
            logger.info(f"Added {handler.name}")

        logger.info(f"Registered {len(self._operations)} operations")

    def add_handler(self, handler: HandlerGroup):
        for name, reply, error_reply, method in handler.get_operations():
            if name in self._operations:
                raise ValueError(f"Operation {name} registered twice")
            self._operations[name] = (reply, error_reply, method)
        self.handlers[handler.name] = handler

    @property
    def operations(self) -> list[str]:
        return sorted(self._operations)

    def startup_push(self) -> Optional[Response]:
        """
        The unsolicited business-data message sent once the UI is ready.

        Returns None on every call after the first.
        """
        if self._startup_pushed:
            return None
        self._startup_pushed = True

        request = Request(operation="startup")
        try:
            business = self.repository.businesses.get_first()
        except Exception as e:
            logger.error(f"Failed to load business for startup push: {e}", exc_info=True)
            return self._error(request, "business-data", e)
        return Response.success(
            request, "business-data", business.to_dict() if business else None
        )

    async def dispatch(self, request: Request) -> Response:
        """Run the handler for request.operation and wrap its result."""
        entry = self._operations.get(request.operation)
        if entry is None:
            logger.warning(f"Unknown operation requested: {request.operation}")
            return Response.failure(
                request,
                "error",
                ERROR_MESSAGES["unknown_operation"].format(operation=request.operation),
                "unknown_operation",
            )

        reply, error_reply, method = entry
        try:
            data = await asyncio.to_thread(method, request.payload)
        except Exception as e:
            return self._error(request, error_reply, e)

        logger.debug(f"Handled {request.operation} -> {reply}")
        return Response.success(request, reply, data)

    def handle(self, request: Request) -> Response:
        """Synchronous dispatch for callers without an event loop."""
        return asyncio.run(self.dispatch(request))

    def _error(self, request: Request, reply: str, error: Exception) -> Response:
        if isinstance(error, PydanticValidationError):
            error = validation_error(error)
        if isinstance(error, ValidationError):
            logger.info(f"Validation failed for {request.operation}: {error}")
            return Response.failure(
                request, reply, str(error), "validation_error", field=error.field
            )
        if isinstance(error, NotFoundError):
            logger.info(f"{request.operation}: {error}")
            return Response.failure(request, reply, str(error), "not_found")
        if isinstance(error, DatabaseUnavailableError):
            logger.warning(f"{request.operation} refused: {error}")
            return Response.failure(
                request,
                reply,
                ERROR_MESSAGES["database_unavailable"],
                "database_unavailable",
            )
        if isinstance(error, BackupError):
            return Response.failure(request, reply, str(error), "backup_error")
        if isinstance(error, sqlite3.IntegrityError):
            logger.warning(f"Constraint violation in {request.operation}: {error}")
            return Response.failure(request, reply, str(error), "constraint_error")
        if isinstance(error, sqlite3.Error):
            return Response.failure(request, reply, str(error), "database_error")

        logger.error(f"Error handling {request.operation}: {error}", exc_info=True)
        return Response.failure(
            request, reply, ERROR_MESSAGES["internal_error"], "internal_error"
        )


def create_bridge(repository: Optional[BackOfficeRepository] = None) -> Bridge:
    """
    Create a bridge with every handler group registered.

    Args:
        repository: Optional BackOfficeRepository instance. If not provided,
                   the default repository will be used.
    """
    bridge = Bridge(repository=repository)
    bridge.setup()
    return bridge
