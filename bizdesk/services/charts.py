"""
Chart service for cash flow visualisation.

Renders the monthly income/expense totals of a business as a PNG image.
"""

import io
import logging
from datetime import date
from typing import Optional

import matplotlib
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from matplotlib.ticker import FuncFormatter

from bizdesk.config import (
    CHART_DPI,
    CHART_FORMAT,
    CHART_HEIGHT,
    CHART_WIDTH,
    DEFAULT_CHART_MONTHS,
    MAX_CHART_MONTHS,
)
from bizdesk.db import BackOfficeRepository, MonthlyTotal
from bizdesk.errors import ValidationError

# Headless backend; the bridge has no display
matplotlib.use("Agg")

logger = logging.getLogger(__name__)

COLORS = {
    "income": "#2ecc71",
    "expenses": "#e74c3c",
    "net": "#3498db",
}


class ChartService:
    """Service for generating cash flow charts."""

    def __init__(self, repository: BackOfficeRepository):
        self.repository = repository

        try:
            sns.set_theme(style="darkgrid")
            logger.info("ChartService initialized successfully")
        except Exception as e:
            logger.warning(f"Failed to set seaborn theme: {e}")

    def generate_cashflow_chart(
        self,
        business_id: int,
        months: int = DEFAULT_CHART_MONTHS,
        today: Optional[date] = None,
    ) -> io.BytesIO:
        """
        Bar chart of monthly income and expenses with a net line.

        Args:
            business_id: Business to chart
            months: Number of trailing months, current month included
            today: Reference date, defaults to today

        Returns:
            BytesIO buffer containing the PNG image

        Raises:
            ValidationError: If months is outside 1..MAX_CHART_MONTHS
        """
        if not 1 <= months <= MAX_CHART_MONTHS:
            raise ValidationError(
                f"months must be between 1 and {MAX_CHART_MONTHS}", field="months"
            )

        totals = self.repository.reports.get_monthly_totals(
            business_id, months=months, today=today
        )
        return self.render(totals)

    def render(self, totals: list[MonthlyTotal]) -> io.BytesIO:
        fig = None
        try:
            fig, ax = plt.subplots(figsize=(CHART_WIDTH, CHART_HEIGHT))

            if not any(t.income or t.expenses for t in totals):
                ax.text(
                    0.5,
                    0.5,
                    "No transaction data available",
                    ha="center",
                    va="center",
                    fontsize=14,
                )
                ax.set_xlim(0, 1)
                ax.set_ylim(0, 1)
                return self._save(fig)

            df = pd.DataFrame(
                {
                    "Month": [t.month for t in totals],
                    "Income": [t.income for t in totals],
                    "Expenses": [t.expenses for t in totals],
                    "Net": [t.net for t in totals],
                }
            )

            bar_width = 0.35
            x = range(len(df))

            ax.bar(
                [i - bar_width / 2 for i in x],
                df["Income"],
                bar_width,
                label="Income",
                color=COLORS["income"],
                alpha=0.8,
            )
            ax.bar(
                [i + bar_width / 2 for i in x],
                df["Expenses"],
                bar_width,
                label="Expenses",
                color=COLORS["expenses"],
                alpha=0.8,
            )
            ax.plot(
                list(x),
                df["Net"],
                color=COLORS["net"],
                linewidth=2,
                marker="o",
                markersize=5,
                label="Net",
            )
            ax.axhline(y=0, color="grey", linestyle="-", linewidth=1, alpha=0.7)

            ax.set_title("Monthly Cash Flow", fontsize=14, fontweight="bold")
            ax.set_xlabel("Month", fontsize=11)
            ax.set_ylabel("Amount", fontsize=11)
            ax.set_xticks(list(x))
            ax.set_xticklabels(df["Month"], rotation=45)
            ax.legend(loc="upper right")
            ax.yaxis.set_major_formatter(FuncFormatter(lambda v, p: f"{v:,.0f}"))

            plt.tight_layout()

            buf = self._save(fig)
            logger.debug(f"Generated cash flow chart for {len(totals)} months")
            return buf
        except Exception as e:
            logger.error(f"Error generating cash flow chart: {e}", exc_info=True)
            raise
        finally:
            # Always close the figure to free memory
            if fig is not None:
                plt.close(fig)

    @staticmethod
    def _save(fig) -> io.BytesIO:
        buf = io.BytesIO()
        fig.savefig(buf, format=CHART_FORMAT, dpi=CHART_DPI, bbox_inches="tight")
        buf.seek(0)
        return buf
