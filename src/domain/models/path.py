from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Path:
    """An administrator-drawn polyline (walkpath or drivepath)."""

    id: str
    nodes: tuple[GeoPoint, ...]
    name: str | None = None

    @property
    def segments(self) -> list[tuple[GeoPoint, GeoPoint]]:
        # Paths with fewer than 2 nodes have no segments.
        return list(zip(self.nodes, self.nodes[1:]))

