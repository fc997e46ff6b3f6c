"""Utility constants and defaults for calperiod.

Time unit constants represent durations in seconds.
Defaults apply when a caller does not pass ``tz`` or ``boundary_type``.
"""

# Time unit constants (all values in seconds)
SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400
WEEK = 604800

# Zone used for naive datetimes, naive strings and integer years
DEFAULT_TZ = "UTC"

# Interval notation of the default boundary type
DEFAULT_BOUNDARY = "[)"

# Serialized endpoints are always rendered in UTC with microseconds
ISO_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
