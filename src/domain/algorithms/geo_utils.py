from __future__ import annotations

import math
from typing import Iterable

from src.domain.models import GeoPoint

EARTH_RADIUS_M = 6371000.0

# Coordinates are rounded to 7 decimals (~1 cm) to form node identities.
NODE_KEY_PRECISION = 7


def distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in meters."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    s = (
        math.sin(dphi / 2.0) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlng / 2.0) ** 2
    )
    return 2.0 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(s)))


def haversine_distance_m(a: GeoPoint, b: GeoPoint) -> float:
    return distance(a.lat, a.lng, b.lat, b.lng)


def bearing(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Initial compass bearing from point 1 to point 2, in [0, 360)."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlng = math.radians(lng2 - lng1)

    y = math.sin(dlng) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(
        dlng
    )
    deg = math.degrees(math.atan2(y, x)) % 360.0
    # -0.0 % 360 and tiny negatives can round up to exactly 360.0.
    return 0.0 if deg >= 360.0 else deg


def initial_bearing_deg(a: GeoPoint, b: GeoPoint) -> float:
    return bearing(a.lat, a.lng, b.lat, b.lng)


def polyline_distance_m(points: Iterable[GeoPoint]) -> float:
    pts = list(points)
    if len(pts) < 2:
        return 0.0
    total = 0.0
    for a, b in zip(pts, pts[1:]):
        total += float(haversine_distance_m(a, b))
    return float(total)


def node_key(lat: float, lng: float) -> str:
    return f"{lat:.{NODE_KEY_PRECISION}f},{lng:.{NODE_KEY_PRECISION}f}"
