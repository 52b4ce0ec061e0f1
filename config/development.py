import os

from config.config import (  # noqa: F401
    HALF_DAY_THRESHOLD_HOURS,
    NOTIFY_TIMEOUT_SECONDS,
    NOTIFY_WEBHOOK_URL,
    WEEKLY_REST_DAY,
    db_config,
    env_flag,
)

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config(default_password="root")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo accounts on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
