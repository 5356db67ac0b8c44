from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Building:
    id: str
    name: str
    location: GeoPoint
    type: str = "Building"
