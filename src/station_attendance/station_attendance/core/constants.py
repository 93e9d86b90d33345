"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_REFERENCE_TIMEZONE = "Africa/Tunis"
DEFAULT_LOG_LEVEL = "INFO"

# Attempts for the presence mirror write when no transaction is available.
MIRROR_WRITE_ATTEMPTS = 2
