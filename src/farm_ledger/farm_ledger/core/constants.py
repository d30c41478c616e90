"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

FULL_DAY_VALUE = 1.0
HALF_DAY_VALUE = 0.5
HALF_DAY_RATE_FACTOR = 0.5

# Soft cap on a worker's combined attendance value for one date.
DAILY_ATTENDANCE_CAP = 1.0

MONTH_KEY_FORMAT = "%Y-%m"
DAY_KEY_FORMAT = "%Y-%m-%d"

DEFAULT_REPORT_MONTHS = 12
