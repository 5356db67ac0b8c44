from __future__ import annotations

import math
from typing import Sequence

from src.domain.algorithms.geo_utils import haversine_distance_m
from src.domain.models import GeoPoint, Path, Projection


def segment_parameter(point: GeoPoint, start: GeoPoint, end: GeoPoint) -> float:
    """Fraction along ``start -> end`` of the closest point, clamped to [0, 1].

    Works in planar (lng, lat) space, which is accurate enough at campus scale.
    """

    dx = end.lng - start.lng
    dy = end.lat - start.lat
    if dx == 0 and dy == 0:
        return 0.0

    t = ((point.lng - start.lng) * dx + (point.lat - start.lat) * dy) / (
        dx * dx + dy * dy
    )
    return max(0.0, min(1.0, t))


def project_point_onto_segment(
    point: GeoPoint, start: GeoPoint, end: GeoPoint
) -> tuple[GeoPoint, float, float]:
    """Return ``(projected_point, distance_m, t)``."""

    t = segment_parameter(point, start, end)
    if t == 0.0:
        projected = start
    elif t == 1.0:
        projected = end
    else:
        projected = GeoPoint(
            lat=start.lat + t * (end.lat - start.lat),
            lng=start.lng + t * (end.lng - start.lng),
        )
    return projected, haversine_distance_m(point, projected), t


def find_closest_projection(
    point: GeoPoint, paths: Sequence[Path]
) -> Projection | None:
    """Closest projection of ``point`` over every segment of every path.

    Returns None when no path has a segment.
    """

    best: Projection | None = None
    best_d = math.inf

    for path_index, path in enumerate(paths):
        for segment_index, (start, end) in enumerate(path.segments):
            projected, d, t = project_point_onto_segment(point, start, end)
            if d < best_d:
                best_d = d
                best = Projection(
                    point=projected,
                    distance_m=d,
                    path_index=path_index,
                    segment_index=segment_index,
                    t=t,
                    path_id=path.id,
                )

    return best
