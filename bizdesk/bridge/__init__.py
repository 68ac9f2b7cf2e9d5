from .client import Bridge, create_bridge
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
    operation,
)
from .protocol import Request, Response
from .runner import run

__all__ = [
    # Bridge
    "Bridge",
    "create_bridge",
    "run",
    # Protocol
    "Request",
    "Response",
    # Handlers
    "AccountingHandler",
    "ClientsHandler",
    "ContentHandler",
    "DocumentsHandler",
    "HandlerGroup",
    "InventoryHandler",
    "InvoicesHandler",
    "LeadsHandler",
    "MaintenanceHandler",
    "ReportsHandler",
    "SettingsHandler",
    "TasksHandler",
    "operation",
]
