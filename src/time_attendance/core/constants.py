"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ROOT_ADMIN_ID = 1
ROOT_ADMIN_USERNAME = "admin"

MIN_PASSWORD_LENGTH = 6

# Minimum time between clocking in and being allowed to clock out.
MIN_WORK_MS = 4 * 60 * 60 * 1000

DEFAULT_GEO_RADIUS_M = 100
EARTH_RADIUS_M = 6371 * 1000

# How far a client-supplied clock timestamp may drift from the server clock.
MAX_CLOCK_SKEW_MS = 5 * 60 * 1000
