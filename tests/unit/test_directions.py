from __future__ import annotations

import pytest

from src.app.services.directions import (
    build_navigation_route,
    compass_direction,
    format_distance,
)
from src.domain.algorithms.geo_utils import polyline_distance_m
from src.domain.models import GeoPoint, RouteResult, RouteStatus, TravelMode


@pytest.mark.parametrize(
    ("bearing_deg", "expected"),
    [
        (0.0, "north"),
        (359.0, "north"),
        (44.0, "northeast"),
        (90.0, "east"),
        (180.0, "south"),
        (225.0, "southwest"),
        (300.0, "northwest"),
    ],
)
@pytest.mark.unit
def test_compass_direction(bearing_deg: float, expected: str) -> None:
    assert compass_direction(bearing_deg) == expected


@pytest.mark.unit
def test_format_distance_rounds_half_up() -> None:
    assert format_distance(12.4) == "12 m"
    assert format_distance(12.5) == "13 m"
    assert format_distance(0.0) == "0 m"


@pytest.mark.unit
def test_walking_steps_name_buildings_and_headings() -> None:
    points = (
        GeoPoint(lat=0.0, lng=0.0),
        GeoPoint(lat=0.001, lng=0.0),
        GeoPoint(lat=0.001, lng=0.001),
        GeoPoint(lat=0.001, lng=0.0011),
    )
    route = RouteResult(points=points, status=RouteStatus.FOUND)

    nav = build_navigation_route(
        route, start_name="Library", end_name="Gym", mode=TravelMode.WALKING
    )

    assert [s.instruction for s in nav.steps] == [
        "Start at Library",
        "Head north along the pathway",
        "Continue east along the pathway",
        "Arrive at Gym",
    ]
    assert [s.icon for s in nav.steps] == ["start", "straight", "straight", "end"]
    assert nav.steps[1].distance_m == pytest.approx(111.19, rel=1e-3)
    assert nav.total_distance_m == pytest.approx(polyline_distance_m(points))
    assert nav.polyline == points
    assert not nav.is_fallback


@pytest.mark.unit
def test_driving_fallback_route_is_flagged() -> None:
    points = (GeoPoint(lat=0.0, lng=0.0), GeoPoint(lat=0.0, lng=0.01))
    route = RouteResult(points=points, status=RouteStatus.STRAIGHT_LINE_FALLBACK)

    nav = build_navigation_route(
        route, start_name="Gate", end_name="Hall", mode=TravelMode.DRIVING
    )

    assert [s.instruction for s in nav.steps] == ["Start at Gate", "Arrive at Hall"]
    assert nav.is_fallback
    assert nav.total_distance_m == pytest.approx(1111.95, rel=1e-3)
