"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

# Night differential window: [22:00, 06:00)
NIGHT_START_HOUR = 22
NIGHT_END_HOUR = 6

DEFAULT_SCHEDULE_START = "09:00"
DEFAULT_SCHEDULE_END = "18:00"

DEFAULT_HISTORY_LIMIT = 10
DEFAULT_REPORT_DAYS = 7
