"""
Inspection script for a bizdesk database.

Prints the live schema of every table and the dashboard figures of the
first business.

Usage:
    python -m bizdesk.main [path/to/bizdesk.sqlite]
"""

import sys
from pathlib import Path

from bizdesk.db import BackOfficeRepository


def main():
    db_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    repository = BackOfficeRepository(db_path)

    print("=" * 60)
    print(f"Database: {repository.db_path}")
    print("=" * 60)

    for table, columns in repository.schema.describe().items():
        print(f"\n{table}")
        print("-" * 40)
        for column in columns:
            print(f"  {column}")

    business = repository.businesses.get_first()
    if business is None:
        print("\nNo business configured")
        return

    stats = repository.reports.get_dashboard_stats(business.id)
    print("\n" + "=" * 60)
    print(f"Dashboard: {business.name} ({business.currency})")
    print("=" * 60)
    print(f"  Forecast:           {stats.forecast:,.2f}")
    print(f"  Revenue:            {stats.revenue:,.2f}")
    print(f"  Expenses:           {stats.expenses:,.2f}")
    print(f"  Profit:             {stats.profit:,.2f}")
    print(f"  Clients:            {stats.clients}")
    print(f"  Open leads:         {stats.leads}")
    print(f"  Forecasted clients: {stats.forecasted_clients}")

    repository.close()


if __name__ == "__main__":
    main()
