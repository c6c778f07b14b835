"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6371000

USER_GEOFENCE_LABEL = "user-specific"
DEFAULT_GLOBAL_GEOFENCE_LABEL = "Office location"

DATE_FORMAT = "%Y-%m-%d"
TIME_OF_DAY_FORMAT = "%H:%M:%S"

DEFAULT_SESSION_DAYS = 7
DEFAULT_LEAVE_LIST_LIMIT = 200
MIN_PASSWORD_LENGTH = 6
