"""Defaults shared by every environment module."""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "hr_portal"),
    }


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Leave decision webhook; empty disables outbound notifications.
NOTIFY_WEBHOOK_URL = os.getenv("NOTIFY_WEBHOOK_URL", "")
NOTIFY_TIMEOUT_SECONDS = float(os.getenv("NOTIFY_TIMEOUT_SECONDS", "5"))

HALF_DAY_THRESHOLD_HOURS = os.getenv("HALF_DAY_THRESHOLD_HOURS", "4.0")
WEEKLY_REST_DAY = int(os.getenv("WEEKLY_REST_DAY", "6"))
