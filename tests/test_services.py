import csv
import io
from datetime import date

import pytest
from openpyxl import load_workbook

from bizdesk.errors import ValidationError
from bizdesk.services import ChartService, ExportFormat, ExportService

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def export_service(repository):
    return ExportService(repository)


@pytest.fixture
def chart_service(repository):
    return ChartService(repository)


@pytest.fixture
def ledger(add_transaction):
    add_transaction(1200, type="Income", on="2024-03-02", account="Sales", description="Retainer")
    add_transaction(300, type="Expense", on="2024-03-05", account="Rent", description="Office")
    add_transaction(45.5, type="Expense", on="2024-02-20", description="Coffee")


def test_csv_has_header_and_one_line_per_transaction(export_service, business_id, ledger):
    buffer = export_service.export_to_csv(business_id)
    text = buffer.getvalue().decode("utf-8-sig")
    rows = list(csv.reader(io.StringIO(text)))

    assert rows[0] == ["ID", "Date", "Description", "Type", "Amount", "Account", "Client"]
    assert len(rows) == 4
    # Newest first
    assert rows[1][1:6] == ["2024-03-05", "Office", "Expense", "300.00", "Rent"]
    assert rows[3][5] == ""


def test_csv_month_filter(export_service, business_id, ledger):
    text = export_service.export_to_csv(business_id, month=2, year=2024).getvalue()
    rows = list(csv.reader(io.StringIO(text.decode("utf-8-sig"))))
    assert len(rows) == 2
    assert rows[1][2] == "Coffee"


def test_xlsx_export(export_service, business_id, ledger):
    buffer = export_service.export(business_id, ExportFormat.XLSX)
    wb = load_workbook(buffer)

    assert wb.sheetnames == ["Transactions", "Summary"]
    ws = wb["Transactions"]
    assert ws.max_row == 4
    assert ws.cell(row=1, column=1).value == "ID"

    summary = wb["Summary"]
    assert summary.cell(row=5, column=3).value == 1200
    assert summary.cell(row=6, column=3).value == 345.5


def test_filename(export_service):
    name = export_service.get_filename(ExportFormat.CSV, month=3, year=2024)
    assert name.startswith("bizdesk_transactions_")
    assert name.endswith("_2024-03.csv")


def test_cashflow_chart_is_png(chart_service, business_id, ledger):
    buffer = chart_service.generate_cashflow_chart(
        business_id, months=3, today=date(2024, 3, 31)
    )
    assert buffer.getvalue().startswith(PNG_MAGIC)


def test_cashflow_chart_without_data(chart_service, business_id):
    buffer = chart_service.generate_cashflow_chart(business_id)
    assert buffer.getvalue().startswith(PNG_MAGIC)


@pytest.mark.parametrize("months", [0, 37])
def test_cashflow_chart_month_bounds(chart_service, business_id, months):
    with pytest.raises(ValidationError):
        chart_service.generate_cashflow_chart(business_id, months=months)
