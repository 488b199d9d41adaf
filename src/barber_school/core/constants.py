"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_BUSY_TIMEOUT_MS = 5000
DEFAULT_PAGE_LIMIT = 100
MAX_PAGE_LIMIT = 500

# Calendar walk stops after this many days without collecting all class dates.
MAX_CALENDAR_SCAN_DAYS = 1000
