from .accounting import AccountingHandler
from .base import HandlerGroup, operation
from .clients import ClientsHandler
from .content import ContentHandler
from .documents import DocumentsHandler
from .inventory import InventoryHandler
from .invoices import InvoicesHandler
from .leads import LeadsHandler
from .maintenance import MaintenanceHandler
from .reports import ReportsHandler
from .settings import SettingsHandler
from .tasks import TasksHandler

__all__ = [
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
