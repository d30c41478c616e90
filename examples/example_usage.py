"""Example: run the ledger through the service layer (no Flask).

Prints the group balance report for one month, e.g.
``python examples/example_usage.py 2025-01``.
"""

import importlib
import sys

from config import get_settings_module

from src.farm_ledger.farm_ledger.container import build_container
from src.farm_ledger.farm_ledger.common.datetime_utils import current_month_key


def main():
    month = sys.argv[1] if len(sys.argv) > 1 else current_month_key()
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    report = container.report_service.balance_report(month)
    for row in report.groups:
        print(f"{row.group_name:<24} opening={row.opening_balance:>10.2f} closing={row.closing_balance:>10.2f}")
    print(f"{'TOTAL':<24} closing={report.totals['closing_balance']:>10.2f}")


if __name__ == "__main__":
    main()
