"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

# Night window 22:00 -> 06:00 (next day), as minutes from midnight.
NIGHT_START_MINUTE = 22 * 60
NIGHT_END_MINUTE = 6 * 60

# Policy defaults used when a stored policy row leaves optional columns empty.
DEFAULT_OVERTIME_THRESHOLD_HOURS = 8.0
DEFAULT_SATURDAY_RATE = 1.5
DEFAULT_SUNDAY_OR_HOLIDAY_RATE = 1.5
DEFAULT_SUNDAY_OVERTIME_RATE = 2.0
DEFAULT_NIGHT_RATE = 1.5
DEFAULT_MEAL_BREAK_MINUTES = 60
DEFAULT_MEAL_BREAK_TRIGGER_HOURS = 8.0
DEFAULT_DINNER_BREAK_MINUTES = 60
DEFAULT_DINNER_BREAK_TRIGGER_HOURS = 9.0
DEFAULT_LEAVE_BASE_HOURS = 8.0
DEFAULT_FULL_DAY_LEAVE_HOURS = 8.0
DEFAULT_MAX_SHIFT_HOURS = 16.0

DEFAULT_REPORT_DAYS = 31
DEFAULT_LOCK_TIMEOUT_SECONDS = 10
MAX_RANGE_DAYS = 366
