"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

UNKNOWN_CHAPTER = "Unknown"
ALL_CHAPTERS = "all"
DEFAULT_BADGE_ICON = "🏅"

CSV_DELIMITER = ","
CSV_LINE_TERMINATOR = "\n"

DEFAULT_SCAN_INTERVAL_SECONDS = 0.2
RECENT_ACTIVITY_LIMIT = 6

DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_INITIAL_DELAY = 0.1
DEFAULT_RETRY_MAX_DELAY = 2.0
DEFAULT_FILE_LOCK_TIMEOUT = 5.0
