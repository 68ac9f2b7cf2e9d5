from .backup import BackupService
from .charts import ChartService
from .export import ExportFormat, ExportService

__all__ = [
    "BackupService",
    "ChartService",
    "ExportFormat",
    "ExportService",
]
