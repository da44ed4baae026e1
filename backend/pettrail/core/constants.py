"""Shared constants for GPS filtering and metric computation.

Keeps the physical constants and limits used by ingestion and metrics in one
place so they can be documented and adjusted together.
"""

# Mean earth radius used by the haversine formula (meters)
EARTH_RADIUS_M = 6371000.0

# Points implying a speed above this relative to the previous accepted
# point of the same batch are dropped (m/s). 50 m/s = 180 km/h.
MAX_SPEED_MPS = 50.0

# Accepted size of a single ingest batch
MIN_POINTS_PER_BATCH = 1
MAX_POINTS_PER_BATCH = 5000

# Coordinate ranges (WGS84 degrees)
LAT_RANGE = (-90.0, 90.0)
LON_RANGE = (-180.0, 180.0)

# Average speed is reported with this many decimals (half-up)
SPEED_DECIMALS = 2
