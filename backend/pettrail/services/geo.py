import math

from pettrail.core.constants import EARTH_RADIUS_M


def haversine_m(lat1, lon1, lat2, lon2):
    """Return great‑circle distance in meters between two WGS84 points.

    Uses the standard haversine formula on a sphere; good enough for
    outlier filtering and walk distances, not for surveying.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lon2) - math.radians(lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_m(a, b) -> float:
    """Distance between two objects exposing `latitude` / `longitude`."""
    return haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)


def path_length_m(points) -> float:
    """Sum of consecutive distances along `points`; 0 for fewer than 2."""
    total = 0.0
    for prev, curr in zip(points, points[1:]):
        total += distance_m(prev, curr)
    return total
