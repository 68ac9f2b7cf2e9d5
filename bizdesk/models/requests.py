"""
Option schemas for bridge operations that are not plain record saves.

Lookups and listings accept either a bare id or an object; these models
cover the extra keys that come with the object form.
"""

import datetime as dt
from typing import ClassVar, Optional

from pydantic import Field, PositiveInt

from bizdesk.config import DEFAULT_CHART_MONTHS, MAX_CHART_MONTHS

from .base import InputModel, LabelEnum
from .invoice import InvoiceStatus


class ExportFormat(LabelEnum):
    """Supported export formats."""

    CSV = "csv"
    XLSX = "xlsx"


class MonthFilter(InputModel):
    """Month window; applied only when both month and year are given."""

    month: Optional[int] = Field(default=None, ge=1, le=12)
    year: Optional[int] = Field(default=None, ge=1, le=9999)


class ExportRequest(MonthFilter):
    label: ClassVar[str] = "export"

    format: ExportFormat = ExportFormat.XLSX


class ChartRequest(InputModel):
    months: int = Field(default=DEFAULT_CHART_MONTHS, ge=1, le=MAX_CHART_MONTHS)


class StatusFilter(InputModel):
    status: Optional[str] = Field(default=None, max_length=50)


class ClientFilter(InputModel):
    """Client scope for shared libraries; no client means the shared set."""

    client_id: Optional[PositiveInt] = None


class PathRequest(InputModel):
    label: ClassVar[str] = "file"

    path: str = Field(min_length=1, max_length=4096)


class InvoiceStatusRequest(InputModel):
    label: ClassVar[str] = "invoice status"

    id: PositiveInt
    status: InvoiceStatus


class PaymentRequest(InputModel):
    label: ClassVar[str] = "payment"

    id: PositiveInt
    paid_on: Optional[dt.date] = None
