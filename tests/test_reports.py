from datetime import date, timedelta

import pytest

from bizdesk.models import LeadInput

TODAY = date(2024, 3, 15)


def add_lead(repository, business_id, **fields):
    return repository.leads.create(
        LeadInput.from_payload({"business_id": business_id, "name": "Lead", **fields})
    )


class TestDashboard:
    def test_forecast_excludes_converted(self, repository, business_id):
        add_lead(repository, business_id, expected_value=1000, probability=50, status="New")
        add_lead(
            repository, business_id, expected_value=2000, probability=100, status="Converted"
        )

        stats = repository.reports.get_dashboard_stats(business_id, today=TODAY)
        assert stats.forecast == 500
        assert stats.leads == 1
        # Probability above the threshold counts even for converted leads
        assert stats.forecasted_clients == 1

    def test_month_to_date_figures(self, repository, business_id, client, add_transaction):
        add_transaction(100, type="Income", on="2024-03-01")
        add_transaction(30, type="Expense", on="2024-03-10")
        add_transaction(50, type="Income", on="2024-02-29")

        stats = repository.reports.get_dashboard_stats(business_id, today=TODAY)
        assert stats.revenue == 100
        assert stats.expenses == 30
        assert stats.profit == 70
        assert stats.clients == 1

    def test_empty_business(self, repository, business_id):
        stats = repository.reports.get_dashboard_stats(business_id, today=TODAY)
        assert stats.to_dict() == {
            "forecast": 0.0,
            "revenue": 0.0,
            "expenses": 0.0,
            "profit": 0.0,
            "clients": 0,
            "leads": 0,
            "forecasted_clients": 0,
        }


class TestFinancialReport:
    def test_all_time_and_month(self, repository, business_id, add_transaction):
        add_transaction(500, type="Income", on="2024-03-02")
        add_transaction(200, type="Expense", on="2024-03-05")
        add_transaction(80, type="Expense", on="2024-04-01")

        report = repository.reports.get_financial_report(business_id).to_dict()
        assert report["incomeStatement"] == {
            "income": 500,
            "expenses": 280,
            "netProfit": 220,
        }
        assert report["balanceSheet"] == {"assets": 220, "liabilities": 0, "equity": 220}

        march = repository.reports.get_financial_report(business_id, month=3, year=2024)
        assert march.net_profit == 300

    def test_month_without_year_is_ignored(self, repository, business_id, add_transaction):
        add_transaction(10, type="Income", on="2023-07-01")
        report = repository.reports.get_financial_report(business_id, month=3)
        assert report.income == 10


def test_tax_report_groups_by_category(repository, business_id, add_transaction):
    add_transaction(100, account="Advertising")
    add_transaction(50, account="Advertising")
    add_transaction(300, account="Rent")
    add_transaction(999)  # no account
    add_transaction(40, account="Cash on Hand")  # no tax category
    add_transaction(700, type="Income", account="Sales")

    assert repository.reports.get_tax_report(business_id) == [
        {"tax_category": "Rent or lease", "total": 300},
        {"tax_category": "Advertising", "total": 150},
    ]


def test_compliance_window(repository, business_id, add_document):
    add_document("Inside", TODAY + timedelta(days=29))
    add_document("Outside", TODAY + timedelta(days=31))
    add_document("Expired", TODAY - timedelta(days=1))
    add_document("Today", TODAY)
    add_document("No expiry")

    alerts = repository.reports.get_compliance_alerts(business_id, today=TODAY)
    assert [d.name for d in alerts] == ["Today", "Inside"]


def test_monthly_totals_fill_empty_months(repository, business_id, add_transaction):
    add_transaction(100, type="Income", on="2024-01-05")
    add_transaction(40, type="Expense", on="2024-03-01")
    add_transaction(999, type="Income", on="2023-09-30")

    totals = repository.reports.get_monthly_totals(business_id, months=3, today=TODAY)
    assert [t.month for t in totals] == ["2024-01", "2024-02", "2024-03"]
    assert [(t.income, t.expenses) for t in totals] == [(100, 0), (0, 0), (0, 40)]
    assert totals[2].net == -40


def test_monthly_totals_cross_year(repository, business_id):
    totals = repository.reports.get_monthly_totals(
        business_id, months=4, today=date(2024, 2, 1)
    )
    assert [t.month for t in totals] == ["2023-11", "2023-12", "2024-01", "2024-02"]
    with pytest.raises(ValueError):
        repository.reports.get_monthly_totals(business_id, months=0)
