"""
Maintenance operations: backup, restore, export, charts and schema info.

Binary results (spreadsheets, images) are returned base64-encoded so they
fit in a JSON response.
"""

import base64
import logging

from bizdesk.config import CHART_FORMAT
from bizdesk.db import BackOfficeRepository
from bizdesk.models import ChartRequest, ExportRequest, PathRequest
from bizdesk.services import BackupService, ChartService, ExportService

from .base import HandlerGroup, operation, payload_id

logger = logging.getLogger(__name__)


class MaintenanceHandler(HandlerGroup):
    """Operations on the database file and derived artefacts."""

    def __init__(
        self,
        repository: BackOfficeRepository,
        backup_service: BackupService,
        export_service: ExportService,
        chart_service: ChartService,
    ):
        super().__init__(repository)
        self.backup_service = backup_service
        self.export_service = export_service
        self.chart_service = chart_service

    @operation("backup-data", "backup-complete")
    def backup_data(self, payload):
        request = PathRequest.from_payload(payload)
        path = self.backup_service.backup(request.path)
        return {"path": str(path)}

    @operation("restore-data", "restore-complete")
    def restore_data(self, payload):
        source = PathRequest.from_payload(payload).path
        applied = self.backup_service.restore(source)
        return {"path": source, "migrations": applied}

    @operation("export-transactions", "export-data")
    def export_transactions(self, payload):
        request = ExportRequest.from_payload(payload)
        business_id = payload_id(payload, "business_id")

        buffer = self.export_service.export(
            business_id, request.format, request.month, request.year
        )
        filename = self.export_service.get_filename(request.format, request.month, request.year)
        logger.info(f"Exported transactions of business {business_id} as {filename}")
        return {
            "filename": filename,
            "format": request.format.value,
            "content": base64.b64encode(buffer.getvalue()).decode("ascii"),
        }

    @operation("get-cashflow-chart", "cashflow-chart-data")
    def get_cashflow_chart(self, payload):
        business_id = payload_id(payload, "business_id")
        months = ChartRequest.from_options(payload).months

        buffer = self.chart_service.generate_cashflow_chart(business_id, months=months)
        return {
            "format": CHART_FORMAT,
            "months": months,
            "image": base64.b64encode(buffer.getvalue()).decode("ascii"),
        }

    @operation("get-schema-info", "schema-info-data")
    def get_schema_info(self, payload):
        return self.repository.schema.describe()
