TIMEZONE = ""

DEFAULT_SCHEDULE_START = "09:00"
DEFAULT_SCHEDULE_END = "18:00"

OVERNIGHT_SCHEDULE_POLICY = "naive"

HISTORY_LIMIT = 10
REPORT_DAYS = 7

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
