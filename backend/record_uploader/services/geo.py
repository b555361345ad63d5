import math
from typing import Sequence

from record_uploader.core.constants import EARTH_RADIUS_KM
from record_uploader.schemas.track import TrackPoint


def haversine_km(lat1, lon1, lat2, lon2):
    """Return great‑circle distance in kilometres between two WGS84 points.

    Uses the standard haversine formula with the same Earth radius the
    remote service uses, so our distances match its own checks.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance(a: TrackPoint, b: TrackPoint) -> float:
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def track_distance(points: Sequence[TrackPoint]) -> float:
    """Sum of leg distances (km) in the order given; 0 for fewer than 2 points."""
    total = 0.0
    for i in range(1, len(points)):
        total += distance(points[i - 1], points[i])
    return total
