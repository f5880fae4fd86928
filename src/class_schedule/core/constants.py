"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DAYS_PER_MONTH = 30
MIN_HORIZON_MONTHS = 1
MAX_HORIZON_MONTHS = 12
DEFAULT_HORIZON_MONTHS = 3

DEFAULT_BEFORE_CLASS_MINUTES = 15
DEFAULT_AFTER_CLASS_MINUTES = 10
REMINDER_INTERVAL_SECONDS = 60

DEFAULT_USER_NAME = "Student"
GOOD_STANDING_PERCENTAGE = 75

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
