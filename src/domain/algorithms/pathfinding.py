from __future__ import annotations

import logging
from typing import Sequence

from src.domain.algorithms.augmentation import augment_graph
from src.domain.algorithms.dijkstra import shortest_path
from src.domain.algorithms.geo_utils import polyline_distance_m
from src.domain.algorithms.graph_builder import SNAP_THRESHOLD_M, build_graph
from src.domain.algorithms.projection import find_closest_projection
from src.domain.models import Building, GeoPoint, Path, RouteResult, RouteStatus

logger = logging.getLogger(__name__)

# ~1 m. Route ends further than this from the building are pinned to it.
ENDPOINT_TOLERANCE_DEG = 1e-5

Endpoint = Building | GeoPoint


def _as_point(endpoint: Endpoint) -> GeoPoint:
    if isinstance(endpoint, Building):
        return endpoint.location
    return endpoint


def _label(endpoint: Endpoint) -> str:
    if isinstance(endpoint, Building):
        return endpoint.name
    return f"({endpoint.lat:.6f}, {endpoint.lng:.6f})"


def _differs(a: GeoPoint, b: GeoPoint, tolerance_deg: float) -> bool:
    return abs(a.lat - b.lat) > tolerance_deg or abs(a.lng - b.lng) > tolerance_deg


def pin_endpoints(
    points: list[GeoPoint],
    start: GeoPoint,
    end: GeoPoint,
    *,
    tolerance_deg: float = ENDPOINT_TOLERANCE_DEG,
) -> list[GeoPoint]:
    """Force the route to touch the exact start/end building coordinates."""

    if not points:
        return points
    out = list(points)
    if _differs(out[0], start, tolerance_deg):
        out[0] = start
    if _differs(out[-1], end, tolerance_deg):
        out[-1] = end
    return out


def find_route(
    start: Endpoint,
    end: Endpoint,
    paths: Sequence[Path],
    *,
    snap_threshold_m: float = SNAP_THRESHOLD_M,
    endpoint_tolerance_deg: float = ENDPOINT_TOLERANCE_DEG,
) -> RouteResult | None:
    """Shortest route between two endpoints over the given path network.

    The graph is rebuilt from ``paths`` on every call; nothing is cached.

    Returns:
        None when there are no paths to project the endpoints onto.
        A ``STRAIGHT_LINE_FALLBACK`` result ``[start, end]`` when the network
        does not connect the endpoints.
        Otherwise a ``FOUND`` result whose first and last points are the
        requested coordinates.
    """

    start_point = _as_point(start)
    end_point = _as_point(end)

    base = build_graph(paths, snap_threshold_m=snap_threshold_m)
    logger.debug("Pathfinding from %s to %s", _label(start), _label(end))

    start_projection = find_closest_projection(start_point, paths)
    end_projection = find_closest_projection(end_point, paths)
    if start_projection is None or end_projection is None:
        logger.info(
            "Could not project %s or %s onto any path", _label(start), _label(end)
        )
        return None

    logger.debug(
        "Start projection on path %d segment %d (%.1fm away)",
        start_projection.path_index,
        start_projection.segment_index,
        start_projection.distance_m,
    )
    logger.debug(
        "End projection on path %d segment %d (%.1fm away)",
        end_projection.path_index,
        end_projection.segment_index,
        end_projection.distance_m,
    )

    augmented = augment_graph(
        base,
        paths,
        start=start_point,
        end=end_point,
        start_projection=start_projection,
        end_projection=end_projection,
        snap_threshold_m=snap_threshold_m,
    )

    found = shortest_path(augmented.graph, augmented.start_key, augmented.end_key)
    if found is None:
        logger.warning(
            "No path connection found between %s and %s; paths are not connected, "
            "returning a straight line",
            _label(start),
            _label(end),
        )
        fallback = (start_point, end_point)
        return RouteResult(
            points=fallback,
            status=RouteStatus.STRAIGHT_LINE_FALLBACK,
            distance_m=polyline_distance_m(fallback),
        )

    nodes = augmented.graph.nodes
    points = [GeoPoint(lat=nodes[k]["lat"], lng=nodes[k]["lng"]) for k in found.nodes]
    points = pin_endpoints(
        points, start_point, end_point, tolerance_deg=endpoint_tolerance_deg
    )

    logger.debug(
        "Route has %d waypoints from %s to %s", len(points), _label(start), _label(end)
    )
    return RouteResult(
        points=tuple(points),
        status=RouteStatus.FOUND,
        distance_m=polyline_distance_m(points),
    )


def compute_route(
    start: Endpoint,
    end: Endpoint,
    paths: Sequence[Path],
    *,
    snap_threshold_m: float = SNAP_THRESHOLD_M,
    endpoint_tolerance_deg: float = ENDPOINT_TOLERANCE_DEG,
) -> list[GeoPoint] | None:
    """Route as a drawable list of points, or None when routing is impossible.

    A disconnected network yields ``[start, end]``; use :func:`find_route`
    to tell that fallback apart from a genuinely short route.
    """

    result = find_route(
        start,
        end,
        paths,
        snap_threshold_m=snap_threshold_m,
        endpoint_tolerance_deg=endpoint_tolerance_deg,
    )
    if result is None:
        return None
    return list(result.points)
