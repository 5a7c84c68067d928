"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_HISTORY_LIMIT = 50
DEFAULT_LEADERBOARD_SIZE = 10
EARLY_BIRD_HOUR = 8

QR_TOKEN_PREFIX = "GYM"
QR_TOKEN_RANDOM_LENGTH = 9
STATS_SESSION_LIMIT = 5000
REMEMBER_ME_DAYS = 7
