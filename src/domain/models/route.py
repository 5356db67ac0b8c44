from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .geo import GeoPoint


class TravelMode(str, Enum):
    WALKING = "walking"
    DRIVING = "driving"


class RouteStatus(str, Enum):
    FOUND = "found"
    # The path network does not connect the endpoints; points is [start, end].
    STRAIGHT_LINE_FALLBACK = "straight_line_fallback"


@dataclass(frozen=True, slots=True)
class RouteResult:
    points: tuple[GeoPoint, ...]
    status: RouteStatus
    distance_m: float = 0.0

    @property
    def is_fallback(self) -> bool:
        return self.status is RouteStatus.STRAIGHT_LINE_FALLBACK


@dataclass(frozen=True, slots=True)
class RouteStep:
    instruction: str
    distance_m: float
    icon: str  # "start" | "straight" | "end"


@dataclass(frozen=True, slots=True)
class NavigationRoute:
    start_name: str
    end_name: str
    mode: TravelMode
    polyline: tuple[GeoPoint, ...]
    steps: tuple[RouteStep, ...] = field(default_factory=tuple)
    total_distance_m: float = 0.0
    is_fallback: bool = False
