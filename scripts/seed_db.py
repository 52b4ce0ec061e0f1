from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hr_portal.hr_portal.common.logging_setup import configure_logging
from src.hr_portal.hr_portal.database.bootstrap import DEMO_ACCOUNTS, apply_seed_sql, ensure_demo_users

logger = logging.getLogger("hr_portal.scripts.seed_db")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_users(db_config)

    logger.info(
        "Seeded %s@%s:%s/%s with demo accounts: %s",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        ", ".join(f"{a.email} ({a.role})" for a in DEMO_ACCOUNTS),
    )


if __name__ == "__main__":
    main()
