"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

FREEZE_THRESHOLD = 3
MAX_LESSON = 10
DEFAULT_LESSON = 1

INACTIVE_INSTRUCTOR_DAYS = 14
DEFAULT_LOG_LIMIT = 50

# (additional occurrences, interval in days)
RECURRENCE_RULES = {
    "weekly": (4, 7),
    "biweekly": (2, 14),
}

STORAGE_KEY_PREFIX = "beit_halohem"
