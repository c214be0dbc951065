import os

TIMEZONE = os.getenv("TIMEZONE", "UTC")

DEFAULT_SCHEDULE_START = os.getenv("DEFAULT_SCHEDULE_START", "09:00")
DEFAULT_SCHEDULE_END = os.getenv("DEFAULT_SCHEDULE_END", "18:00")

OVERNIGHT_SCHEDULE_POLICY = os.getenv("OVERNIGHT_SCHEDULE_POLICY", "naive")

HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "10"))
REPORT_DAYS = int(os.getenv("REPORT_DAYS", "7"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
