import os

from config.config import (  # noqa: F401
    HALF_DAY_THRESHOLD_HOURS,
    LOG_LEVEL,
    NOTIFY_TIMEOUT_SECONDS,
    NOTIFY_WEBHOOK_URL,
    WEEKLY_REST_DAY,
    db_config,
    env_flag,
)

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config()

DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
