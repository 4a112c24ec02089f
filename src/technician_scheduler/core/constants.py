"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Asia/Jakarta"
DEFAULT_DAY_CUTOFF_MINUTES = 5
MINUTES_PER_DAY = 24 * 60

MIN_PENDING_REASON_LENGTH = 5
INITIALS_LENGTH = 2

# Man-days above target * tolerance are flagged as over budget.
MAN_DAYS_TOLERANCE = 1.2
