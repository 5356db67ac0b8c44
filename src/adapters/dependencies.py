from __future__ import annotations

import os

from src.adapters.persistence.local_json_campus_repository import (
    LocalJsonCampusRepository,
)
from src.app.services.pathfinding_service import KIOSK_ID, PathfindingService
from src.domain.models import Building, GeoPoint

# "You are here" marker of the default kiosk deployment.
DEFAULT_KIOSK_LAT = 14.403115555479292
DEFAULT_KIOSK_LNG = 120.86635977029803
DEFAULT_KIOSK_NAME = "Your Location (Kiosk)"


def get_kiosk() -> Building:
    lat = float(os.getenv("KIOSK_LAT") or DEFAULT_KIOSK_LAT)
    lng = float(os.getenv("KIOSK_LNG") or DEFAULT_KIOSK_LNG)
    name = (os.getenv("KIOSK_NAME") or "").strip() or DEFAULT_KIOSK_NAME
    return Building(
        id=KIOSK_ID, name=name, type="Kiosk", location=GeoPoint(lat=lat, lng=lng)
    )


def get_pathfinding_service(data_path: str | None = None) -> PathfindingService:
    repo = LocalJsonCampusRepository(data_path=data_path)
    service = PathfindingService(
        path_repository=repo,
        building_repository=repo,
        kiosk=get_kiosk(),
    )

    # Allow tuning via env without changing code.
    if os.getenv("SNAP_THRESHOLD_M"):
        service.snap_threshold_m = float(os.environ["SNAP_THRESHOLD_M"])
    if os.getenv("ENDPOINT_TOLERANCE_DEG"):
        service.endpoint_tolerance_deg = float(os.environ["ENDPOINT_TOLERANCE_DEG"])

    return service
