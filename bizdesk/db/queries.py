"""
Queries repository module for reporting and analytics.

Handles all read-only derived views:
- Dashboard statistics (forecast, month-to-date revenue and expenses)
- Income statement and simplified balance sheet
- Expenses grouped by tax category
- Compliance alerts for expiring documents
- Monthly income/expense totals for charts
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Optional

from bizdesk.config import (
    COMPLIANCE_LOOKAHEAD_DAYS,
    DEFAULT_CHART_MONTHS,
    FORECAST_PROBABILITY_THRESHOLD,
)
from bizdesk.models.crm import LeadStatus

from .base import BaseRepository
from .dates import month_bounds, parse_month_filter, shift_month
from .models import Document

logger = logging.getLogger(__name__)


@dataclass
class DashboardStats:
    """Headline numbers for the dashboard."""

    forecast: float
    revenue: float
    expenses: float
    profit: float
    clients: int
    leads: int
    forecasted_clients: int

    def to_dict(self) -> dict:
        return {
            "forecast": self.forecast,
            "revenue": self.revenue,
            "expenses": self.expenses,
            "profit": self.profit,
            "clients": self.clients,
            "leads": self.leads,
            "forecasted_clients": self.forecasted_clients,
        }


@dataclass
class FinancialReport:
    """
    Income statement plus a simplified balance sheet.

    The balance sheet is not double-entry: assets and equity both equal net
    profit and liabilities are always zero.
    """

    income: float
    expenses: float

    @property
    def net_profit(self) -> float:
        return self.income - self.expenses

    def to_dict(self) -> dict:
        return {
            "incomeStatement": {
                "income": self.income,
                "expenses": self.expenses,
                "netProfit": self.net_profit,
            },
            "balanceSheet": {
                "assets": self.net_profit,
                "liabilities": 0,
                "equity": self.net_profit,
            },
        }


@dataclass
class MonthlyTotal:
    month: str  # YYYY-MM
    income: float
    expenses: float

    @property
    def net(self) -> float:
        return self.income - self.expenses

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "income": self.income,
            "expenses": self.expenses,
            "net": self.net,
        }


class QueryRepository(BaseRepository):
    """
    Repository for reporting queries.

    Provides read-only aggregate operations over the bookkeeping and CRM
    tables.
    """

    # =========================================================================
    # Dashboard
    # =========================================================================

    def get_dashboard_stats(
        self, business_id: int, today: Optional[date] = None
    ) -> DashboardStats:
        """
        Compute the dashboard figures for a business.

        Each figure comes from its own query; they share nothing but the
        connection, and profit is derived only once all of them are in.

        Args:
            business_id: Business to report on
            today: Reference date for the current month, defaults to today

        Returns:
            DashboardStats for the business
        """
        today = today or date.today()
        month_start, month_end = month_bounds(today.year, today.month)

        queries: dict[str, tuple[str, tuple]] = {
            "forecast": (
                """
                SELECT SUM(expected_value * (probability / 100.0)) FROM leads
                WHERE business_id = ? AND status != ?
                """,
                (business_id, LeadStatus.CONVERTED.value),
            ),
            "revenue": (
                """
                SELECT SUM(amount) FROM transactions
                WHERE business_id = ? AND type = 'Income' AND date >= ? AND date < ?
                """,
                (business_id, month_start, month_end),
            ),
            "expenses": (
                """
                SELECT SUM(amount) FROM transactions
                WHERE business_id = ? AND type = 'Expense' AND date >= ? AND date < ?
                """,
                (business_id, month_start, month_end),
            ),
            "clients": (
                "SELECT COUNT(*) FROM clients WHERE business_id = ?",
                (business_id,),
            ),
            "leads": (
                "SELECT COUNT(*) FROM leads WHERE business_id = ? AND status != ?",
                (business_id, LeadStatus.CONVERTED.value),
            ),
            "forecasted_clients": (
                """
                SELECT COUNT(*) FROM leads
                WHERE business_id = ?
                AND (status IN (?, ?) OR probability > ?)
                """,
                (
                    business_id,
                    LeadStatus.PROPOSAL.value,
                    LeadStatus.NURTURING.value,
                    FORECAST_PROBABILITY_THRESHOLD,
                ),
            ),
        }

        results: dict[str, Any] = {}
        with self._get_connection() as conn:
            for key, (sql, params) in queries.items():
                row = conn.execute(sql, params).fetchone()
                results[key] = (row[0] if row else None) or 0

        return DashboardStats(
            forecast=float(results["forecast"]),
            revenue=float(results["revenue"]),
            expenses=float(results["expenses"]),
            profit=float(results["revenue"]) - float(results["expenses"]),
            clients=int(results["clients"]),
            leads=int(results["leads"]),
            forecasted_clients=int(results["forecasted_clients"]),
        )

    # =========================================================================
    # Financial Statements
    # =========================================================================

    def get_financial_report(
        self,
        business_id: int,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> FinancialReport:
        """
        Income and expense totals, optionally limited to one calendar month.

        Args:
            business_id: Business to report on
            month: Calendar month (1-12); only applied together with year
            year: Calendar year; only applied together with month
        """
        query = """
            SELECT
                COALESCE(SUM(CASE WHEN type = 'Income' THEN amount ELSE 0 END), 0),
                COALESCE(SUM(CASE WHEN type = 'Expense' THEN amount ELSE 0 END), 0)
            FROM transactions
            WHERE business_id = ?
        """
        params: list = [business_id]

        window = parse_month_filter(month, year)
        if window:
            query += " AND date >= ? AND date < ?"
            params.extend(window)

        with self._get_connection() as conn:
            row = conn.execute(query, params).fetchone()

        return FinancialReport(income=float(row[0]), expenses=float(row[1]))

    # =========================================================================
    # Tax Preparation
    # =========================================================================

    def get_tax_report(self, business_id: int) -> list[dict]:
        """
        Expense totals grouped by the linked account's tax category.

        Transactions without an account, and accounts without a tax category,
        are left out.

        Returns:
            List of {tax_category, total}, largest total first
        """
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT a.tax_category AS tax_category, SUM(t.amount) AS total
                FROM transactions t
                JOIN accounts a ON t.account_id = a.id
                WHERE t.business_id = ?
                AND t.type = 'Expense'
                AND a.tax_category IS NOT NULL
                GROUP BY a.tax_category
                ORDER BY total DESC
                """,
                (business_id,),
            )
            return [
                {"tax_category": row["tax_category"], "total": row["total"] or 0.0}
                for row in cursor.fetchall()
            ]

    # =========================================================================
    # Compliance
    # =========================================================================

    def get_compliance_alerts(
        self,
        business_id: int,
        today: Optional[date] = None,
        days: int = COMPLIANCE_LOOKAHEAD_DAYS,
    ) -> list[Document]:
        """
        Documents expiring between today and today + days, inclusive.

        Documents with no expiry date never alert.
        """
        today = today or date.today()
        horizon = today + timedelta(days=days)

        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT * FROM documents
                WHERE business_id = ?
                AND expiry_date IS NOT NULL
                AND expiry_date >= ?
                AND expiry_date <= ?
                ORDER BY expiry_date ASC
                """,
                (business_id, today.isoformat(), horizon.isoformat()),
            )
            return [Document.from_row(row) for row in cursor.fetchall()]

    # =========================================================================
    # Trends
    # =========================================================================

    def get_monthly_totals(
        self,
        business_id: int,
        months: int = DEFAULT_CHART_MONTHS,
        today: Optional[date] = None,
    ) -> list[MonthlyTotal]:
        """
        Income and expense totals for each of the trailing months.

        The window ends with the current month; months without transactions
        are included with zero totals.
        """
        if months < 1:
            raise ValueError(f"months must be positive: {months}")

        today = today or date.today()
        first_year, first_month = shift_month(today.year, today.month, -(months - 1))
        start, _ = month_bounds(first_year, first_month)
        _, end = month_bounds(today.year, today.month)

        totals: dict[str, MonthlyTotal] = {}
        for offset in range(months):
            year, month = shift_month(first_year, first_month, offset)
            key = f"{year:04d}-{month:02d}"
            totals[key] = MonthlyTotal(month=key, income=0.0, expenses=0.0)

        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT substr(date, 1, 7) AS month, type, SUM(amount) AS total
                FROM transactions
                WHERE business_id = ? AND date >= ? AND date < ?
                GROUP BY substr(date, 1, 7), type
                """,
                (business_id, start, end),
            )
            for row in cursor.fetchall():
                bucket = totals.get(row["month"])
                if bucket is None:
                    continue
                if row["type"] == "Income":
                    bucket.income = row["total"] or 0.0
                elif row["type"] == "Expense":
                    bucket.expenses = row["total"] or 0.0

        return list(totals.values())
