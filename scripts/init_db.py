from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.farm_ledger.farm_ledger.database.bootstrap import apply_schema, list_tables

logger = logging.getLogger("farm_ledger.init_db")

LEDGER_TABLES = {
    "workers",
    "work_groups",
    "activities",
    "areas",
    "expense_categories",
    "month_sheets",
    "month_group_instances",
    "day_entries",
    "attendance_marks",
    "expenses",
    "expense_allocations",
    "payments",
}


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(message)s")
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = set(list_tables(db_config))
    missing = sorted(LEDGER_TABLES - tables)
    if missing:
        logger.error("schema applied but tables are missing: %s", ", ".join(missing))
        return 1

    logger.info(
        "ledger schema ready on %s@%s:%s/%s (tables=%s)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        len(tables),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
