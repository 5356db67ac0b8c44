from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class GraphNode:
    """A routing graph vertex keyed by its rounded coordinates.

    ``path_id`` is the owning path, or None once the node represents a
    junction of several paths (or a temporary building/projection point).
    """

    id: str
    lat: float
    lng: float
    path_id: str | None = None


@dataclass(frozen=True, slots=True)
class Edge:
    source: str
    target: str
    distance_m: float


@dataclass(frozen=True, slots=True)
class Projection:
    """Closest point on one path segment to an external coordinate."""

    point: GeoPoint
    distance_m: float
    path_index: int
    segment_index: int
    t: float  # fraction along the segment, in [0, 1]
    path_id: str | None = None
