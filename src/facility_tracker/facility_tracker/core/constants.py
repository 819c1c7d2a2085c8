"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

FLOORS = tuple(range(1, 13))
DEFAULT_SHIFT_MINUTES = 480
DEFAULT_STATS_DAYS = 7
LOCAL_ID_LENGTH = 9
MS_PER_MINUTE = 60_000
AI_RATING_RANGE = (0.0, 10.0)
