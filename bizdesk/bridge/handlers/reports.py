"""
Dashboard and report operations.
"""

from bizdesk.models import MonthFilter

from .base import HandlerGroup, operation, payload_id, rows


class ReportsHandler(HandlerGroup):
    """Read-only aggregate views."""

    @operation("get-dashboard-stats", "dashboard-stats")
    def get_dashboard_stats(self, payload):
        business_id = payload_id(payload, "business_id")
        return self.repository.reports.get_dashboard_stats(business_id).to_dict()

    @operation("get-financial-reports", "financial-reports-data")
    def get_financial_reports(self, payload):
        business_id = payload_id(payload, "business_id")
        window = MonthFilter.from_options(payload)
        report = self.repository.reports.get_financial_report(
            business_id, month=window.month, year=window.year
        )
        return report.to_dict()

    @operation("get-tax-report", "tax-report-data")
    def get_tax_report(self, payload):
        return self.repository.reports.get_tax_report(payload_id(payload, "business_id"))

    @operation("get-compliance-alerts", "compliance-alerts-data")
    def get_compliance_alerts(self, payload):
        business_id = payload_id(payload, "business_id")
        return rows(self.repository.reports.get_compliance_alerts(business_id))
