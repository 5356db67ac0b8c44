from __future__ import annotations

from src.domain.algorithms.geo_utils import haversine_distance_m, initial_bearing_deg
from src.domain.models import NavigationRoute, RouteResult, RouteStep, TravelMode

_COMPASS = (
    "north",
    "northeast",
    "east",
    "southeast",
    "south",
    "southwest",
    "west",
    "northwest",
)


def compass_direction(bearing_deg: float) -> str:
    return _COMPASS[int(((bearing_deg % 360.0) + 22.5) // 45.0) % 8]


def format_distance(distance_m: float) -> str:
    return f"{int(max(0.0, distance_m) + 0.5)} m"


def build_navigation_route(
    route: RouteResult, *, start_name: str, end_name: str, mode: TravelMode
) -> NavigationRoute:
    """Turn a computed route into kiosk-style direction steps.

    The final leg (path -> destination building) is folded into the
    arrival step; every leg still counts toward the total distance.
    """

    corridor = "pathway" if mode is TravelMode.WALKING else "road"
    points = route.points

    steps: list[RouteStep] = [
        RouteStep(instruction=f"Start at {start_name}", distance_m=0.0, icon="start")
    ]
    total = 0.0
    legs = list(zip(points, points[1:]))
    for i, (a, b) in enumerate(legs):
        d = haversine_distance_m(a, b)
        total += d
        if i == len(legs) - 1:
            break
        verb = "Head" if i == 0 else "Continue"
        heading = compass_direction(initial_bearing_deg(a, b))
        steps.append(
            RouteStep(
                instruction=f"{verb} {heading} along the {corridor}",
                distance_m=d,
                icon="straight",
            )
        )
    steps.append(
        RouteStep(instruction=f"Arrive at {end_name}", distance_m=0.0, icon="end")
    )

    return NavigationRoute(
        start_name=start_name,
        end_name=end_name,
        mode=mode,
        polyline=tuple(points),
        steps=tuple(steps),
        total_distance_m=total,
        is_fallback=route.is_fallback,
    )
