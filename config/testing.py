from config.config import (  # noqa: F401
    HALF_DAY_THRESHOLD_HOURS,
    WEEKLY_REST_DAY,
    db_config,
    env_flag,
)

SECRET_KEY = "test-secret"

DB_CONFIG = db_config(default_password="12345")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

# Tests never talk to a real webhook.
NOTIFY_WEBHOOK_URL = ""
NOTIFY_TIMEOUT_SECONDS = 1.0

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
