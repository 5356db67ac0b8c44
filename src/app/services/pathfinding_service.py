from __future__ import annotations

from dataclasses import dataclass

from src.app.ports.output import IBuildingRepository, IPathRepository
from src.domain.algorithms.graph_builder import SNAP_THRESHOLD_M
from src.domain.algorithms.pathfinding import ENDPOINT_TOLERANCE_DEG, find_route
from src.domain.exceptions import BuildingNotFound, NoPathFound
from src.domain.models import Building, NavigationRoute, TravelMode

from .directions import build_navigation_route

KIOSK_ID = "kiosk"


@dataclass(slots=True)
class PathfindingService:
    """Application service (use case) for building-to-building navigation.

    Paths are fetched from the repository on every request and handed to
    the stateless routing core.
    """

    path_repository: IPathRepository
    building_repository: IBuildingRepository
    kiosk: Building | None = None

    # Tuning knobs
    snap_threshold_m: float = SNAP_THRESHOLD_M
    endpoint_tolerance_deg: float = ENDPOINT_TOLERANCE_DEG

    def resolve_building(self, building_id: str) -> Building:
        if building_id == KIOSK_ID and self.kiosk is not None:
            return self.kiosk
        building = self.building_repository.get_building(building_id)
        if building is None:
            raise BuildingNotFound(f"Unknown building: {building_id}")
        return building

    def route_between_buildings(
        self,
        *,
        start_id: str,
        end_id: str,
        mode: TravelMode = TravelMode.WALKING,
    ) -> NavigationRoute:
        start = self.resolve_building(start_id)
        end = self.resolve_building(end_id)

        paths = self.path_repository.list_paths(mode)
        route = find_route(
            start,
            end,
            paths,
            snap_threshold_m=self.snap_threshold_m,
            endpoint_tolerance_deg=self.endpoint_tolerance_deg,
        )
        if route is None:
            raise NoPathFound(f"No {mode.value} paths available for routing")

        return build_navigation_route(
            route, start_name=start.name, end_name=end.name, mode=mode
        )
