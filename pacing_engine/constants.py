"""Fixed planning policy constants."""

DEFAULT_PLAN_START_HOUR = 7
DEFAULT_PLAN_END_HOUR = 23
MINUTES_PER_DAY = 24 * 60

DEFAULT_TASK_DURATION = 60
TASK_TYPES = ("study", "event")

# Required pace above this multiple of the stated targets counts as behind.
WARNING_SCALE = 1.2

Z_INDEX_BASE = 10

HISTORY_DAYS = 140
DAILY_MINUTES_CAP = 240
HEATMAP_WEEKS = 20

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
