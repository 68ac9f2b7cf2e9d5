"""
Export service for bookkeeping data.

Provides functionality to export a business's transactions to XLSX and CSV
formats.
"""

import csv
import io
from datetime import datetime
from typing import Optional, cast

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from bizdesk.config import MAX_EXPORT_ENTRIES
from bizdesk.db import BackOfficeRepository, Transaction
from bizdesk.models import ExportFormat

HEADERS = [
    "ID",
    "Date",
    "Description",
    "Type",
    "Amount",
    "Account",
    "Client",
]


class ExportService:
    """Service for exporting transactions to spreadsheet formats."""

    def __init__(self, repository: BackOfficeRepository):
        """
        Initialize the export service.

        Args:
            repository: Back office repository
        """
        self.repository = repository

    def export(
        self,
        business_id: int,
        format: ExportFormat,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> io.BytesIO:
        if format == ExportFormat.CSV:
            return self.export_to_csv(business_id, month, year)
        return self.export_to_xlsx(business_id, month, year)

    def export_to_csv(
        self,
        business_id: int,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> io.BytesIO:
        """
        Export transactions to CSV format.

        Args:
            business_id: Business whose transactions are exported
            month: Optional calendar month filter (needs year)
            year: Optional calendar year filter (needs month)

        Returns:
            BytesIO buffer containing the CSV data
        """
        entries = self._get_entries(business_id, month, year)

        buffer = io.BytesIO()
        text_buffer = io.StringIO()

        writer = csv.writer(text_buffer)
        writer.writerow(HEADERS)

        for entry in entries:
            writer.writerow(
                [
                    entry.id,
                    entry.date,
                    entry.description,
                    entry.type,
                    f"{entry.amount:.2f}",
                    entry.account_name or "",
                    entry.client_name or "",
                ]
            )

        buffer.write(text_buffer.getvalue().encode("utf-8-sig"))  # BOM for Excel
        buffer.seek(0)

        return buffer

    def export_to_xlsx(
        self,
        business_id: int,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> io.BytesIO:
        """
        Export transactions to XLSX with a colour-coded sheet and a summary.

        Args:
            business_id: Business whose transactions are exported
            month: Optional calendar month filter (needs year)
            year: Optional calendar year filter (needs month)

        Returns:
            BytesIO buffer containing the XLSX data
        """
        entries = self._get_entries(business_id, month, year)

        wb = Workbook()
        ws = cast(Worksheet, wb.active)
        ws.title = "Transactions"

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(
            start_color="4472C4", end_color="4472C4", fill_type="solid"
        )
        income_fill = PatternFill(
            start_color="C6EFCE", end_color="C6EFCE", fill_type="solid"
        )
        expense_fill = PatternFill(
            start_color="FFC7CE", end_color="FFC7CE", fill_type="solid"
        )

        for col, header in enumerate(HEADERS, 1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")

        for row_idx, entry in enumerate(entries, 2):
            values = [
                entry.id,
                entry.date,
                entry.description,
                entry.type,
                entry.amount,
                entry.account_name or "",
                entry.client_name or "",
            ]
            fill = income_fill if entry.type == "Income" else expense_fill
            for col, value in enumerate(values, 1):
                cell = ws.cell(row=row_idx, column=col, value=value)
                cell.fill = fill
            ws.cell(row=row_idx, column=5).number_format = "#,##0.00"

        column_widths = [8, 12, 40, 10, 15, 20, 20]
        for col, width in enumerate(column_widths, 1):
            ws.column_dimensions[get_column_letter(col)].width = width

        ws.freeze_panes = "A2"

        self._add_summary_sheet(wb, entries)

        buffer = io.BytesIO()
        wb.save(buffer)
        buffer.seek(0)

        return buffer

    def _add_summary_sheet(self, wb: Workbook, entries: list[Transaction]):
        """Add a summary sheet to the workbook."""
        ws = wb.create_sheet(title="Summary")

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)

        ws.cell(row=1, column=1, value="Transaction Summary").font = title_font
        ws.cell(
            row=2,
            column=1,
            value=f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}",
        )

        income = [e for e in entries if e.type == "Income"]
        expenses = [e for e in entries if e.type == "Expense"]
        total_income = sum(e.amount for e in income)
        total_expenses = sum(e.amount for e in expenses)

        summary_start = 4
        ws.cell(row=summary_start, column=1, value="Type").font = header_font
        ws.cell(row=summary_start, column=2, value="Count").font = header_font
        ws.cell(row=summary_start, column=3, value="Total").font = header_font

        ws.cell(row=summary_start + 1, column=1, value="Income")
        ws.cell(row=summary_start + 1, column=2, value=len(income))
        ws.cell(row=summary_start + 1, column=3, value=total_income)

        ws.cell(row=summary_start + 2, column=1, value="Expense")
        ws.cell(row=summary_start + 2, column=2, value=len(expenses))
        ws.cell(row=summary_start + 2, column=3, value=total_expenses)

        ws.cell(row=summary_start + 4, column=1, value="Net Profit").font = header_font
        ws.cell(row=summary_start + 4, column=3, value=total_income - total_expenses)

        for row in range(summary_start + 1, summary_start + 5):
            ws.cell(row=row, column=3).number_format = "#,##0.00"

        ws.column_dimensions["A"].width = 15
        ws.column_dimensions["B"].width = 10
        ws.column_dimensions["C"].width = 18

    def _get_entries(
        self,
        business_id: int,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> list[Transaction]:
        return self.repository.transactions.list_by_business(
            business_id, month=month, year=year, limit=MAX_EXPORT_ENTRIES
        )

    def get_filename(
        self,
        format: ExportFormat,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> str:
        """
        Generate a filename for the export.

        Returns:
            Suggested filename, e.g. bizdesk_transactions_20240131_2024-01.csv
        """
        date_str = datetime.now().strftime("%Y%m%d")
        period = f"_{int(year):04d}-{int(month):02d}" if month and year else ""
        return f"bizdesk_transactions_{date_str}{period}.{format.value}"
