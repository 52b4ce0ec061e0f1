"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

HALF_DAY_THRESHOLD_HOURS = Decimal("4.0")
WEEKLY_REST_DAY = 6  # date.weekday() for Sunday
DEFAULT_HISTORY_LIMIT = 31
DEFAULT_PAYROLL_HISTORY_MONTHS = 6
DEFAULT_LIST_LIMIT = 500
MIN_LOGIN_PASSWORD_LENGTH = 6
MIN_SIGNUP_PASSWORD_LENGTH = 8
MAX_EMAIL_LENGTH = 255

# Money columns are DECIMAL(12,2).
MONEY_QUANTUM = Decimal("0.01")
MAX_MONEY_AMOUNT = Decimal("10000000000")
