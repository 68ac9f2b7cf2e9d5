from .account import (
    DEFAULT_ACCOUNTS,
    DEFAULT_TAX_CATEGORIES,
    AccountInput,
    AccountType,
    TransactionInput,
    TransactionType,
)
from .base import InputModel, LabelEnum, record_id, validation_error
from .content import CaptionInput, ContentItemInput, ContentStatus, HashtagSetInput
from .crm import (
    BusinessInput,
    ClientInput,
    LeadInput,
    LeadStatus,
    TaskInput,
    TaskStatus,
)
from .invoice import InvoiceInput, InvoiceItemInput, InvoiceStatus
from .records import (
    ClientDocumentInput,
    DocumentInput,
    DocumentType,
    ProductInput,
    ProductType,
)
from .requests import (
    ChartRequest,
    ClientFilter,
    ExportFormat,
    ExportRequest,
    InvoiceStatusRequest,
    MonthFilter,
    PathRequest,
    PaymentRequest,
    StatusFilter,
)

__all__ = [
    "AccountType",
    "TransactionType",
    "LeadStatus",
    "TaskStatus",
    "InvoiceStatus",
    "DocumentType",
    "ProductType",
    "ContentStatus",
    "ExportFormat",
    "LabelEnum",
    "DEFAULT_ACCOUNTS",
    "DEFAULT_TAX_CATEGORIES",
    "InputModel",
    "AccountInput",
    "BusinessInput",
    "CaptionInput",
    "ClientDocumentInput",
    "ClientInput",
    "ContentItemInput",
    "DocumentInput",
    "HashtagSetInput",
    "InvoiceInput",
    "InvoiceItemInput",
    "LeadInput",
    "ProductInput",
    "TaskInput",
    "TransactionInput",
    "ChartRequest",
    "ClientFilter",
    "ExportRequest",
    "InvoiceStatusRequest",
    "MonthFilter",
    "PathRequest",
    "PaymentRequest",
    "StatusFilter",
    "record_id",
    "validation_error",
]
