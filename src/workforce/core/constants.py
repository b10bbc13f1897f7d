"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "America/Los_Angeles"
MIN_PASSWORD_LENGTH = 6
CURRENCY_SYMBOL = "$"
DATE_FORMAT = "%Y-%m-%d"
