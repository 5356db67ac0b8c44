from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from pydantic import ValidationError

from src.adapters.dependencies import get_pathfinding_service
from src.domain.exceptions import RoutingError
from src.domain.models import NavigationRoute, TravelMode


def _route_to_dict(route: NavigationRoute) -> dict:
    return {
        "start": route.start_name,
        "end": route.end_name,
        "mode": route.mode.value,
        "polyline": [{"lat": p.lat, "lng": p.lng} for p in route.polyline],
        "steps": [
            {
                "instruction": step.instruction,
                "distance_m": round(step.distance_m, 1),
                "icon": step.icon,
            }
            for step in route.steps
        ],
        "total_distance_m": round(route.total_distance_m, 1),
        "is_fallback": route.is_fallback,
    }


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute a campus route between two buildings."
    )
    parser.add_argument("--from", dest="start_id", required=True)
    parser.add_argument("--to", dest="end_id", required=True)
    parser.add_argument(
        "--mode",
        choices=[m.value for m in TravelMode],
        default=TravelMode.WALKING.value,
    )
    parser.add_argument(
        "--data", help="Campus JSON file (overrides CAMPUS_DATA_PATH)", default=None
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=(os.getenv("LOG_LEVEL") or "WARNING").strip().upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        service = get_pathfinding_service(data_path=args.data)
        route = service.route_between_buildings(
            start_id=args.start_id, end_id=args.end_id, mode=TravelMode(args.mode)
        )
    except (RoutingError, FileNotFoundError, ValidationError) as exc:
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(_route_to_dict(route), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
