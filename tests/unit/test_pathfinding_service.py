from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from src.app.services.pathfinding_service import PathfindingService
from src.domain.exceptions import BuildingNotFound, NoPathFound
from src.domain.models import Building, GeoPoint, Path, TravelMode


@dataclass(slots=True)
class FakePathRepository:
    paths_by_mode: dict[TravelMode, list[Path]]
    requested: list[TravelMode] = field(default_factory=list)

    def list_paths(self, mode: TravelMode) -> list[Path]:
        self.requested.append(mode)
        return list(self.paths_by_mode.get(mode, []))


@dataclass(slots=True)
class FakeBuildingRepository:
    buildings: list[Building]

    def list_buildings(self) -> list[Building]:
        return list(self.buildings)

    def get_building(self, building_id: str) -> Building | None:
        return next((b for b in self.buildings if b.id == building_id), None)


def _service(**kwargs) -> PathfindingService:
    walkway = Path(
        id="w1",
        nodes=(
            GeoPoint(lat=0.0, lng=0.0),
            GeoPoint(lat=0.0, lng=0.001),
            GeoPoint(lat=0.0, lng=0.002),
        ),
    )
    buildings = [
        Building(id="lib", name="Library", location=GeoPoint(lat=0.0001, lng=0.0)),
        Building(id="gym", name="Gym", location=GeoPoint(lat=0.0001, lng=0.002)),
    ]
    return PathfindingService(
        path_repository=FakePathRepository({TravelMode.WALKING: [walkway]}),
        building_repository=FakeBuildingRepository(buildings),
        **kwargs,
    )


@pytest.mark.unit
def test_route_between_buildings_builds_navigation_route() -> None:
    service = _service()

    nav = service.route_between_buildings(start_id="lib", end_id="gym")

    assert nav.start_name == "Library"
    assert nav.end_name == "Gym"
    assert nav.mode is TravelMode.WALKING
    assert nav.polyline[0] == GeoPoint(lat=0.0001, lng=0.0)
    assert nav.polyline[-1] == GeoPoint(lat=0.0001, lng=0.002)
    assert nav.steps[0].instruction == "Start at Library"
    assert nav.steps[-1].instruction == "Arrive at Gym"
    assert service.path_repository.requested == [TravelMode.WALKING]


@pytest.mark.unit
def test_unknown_building_raises() -> None:
    with pytest.raises(BuildingNotFound):
        _service().route_between_buildings(start_id="lib", end_id="nope")


@pytest.mark.unit
def test_mode_without_paths_raises_no_path_found() -> None:
    with pytest.raises(NoPathFound):
        _service().route_between_buildings(
            start_id="lib", end_id="gym", mode=TravelMode.DRIVING
        )


@pytest.mark.unit
def test_kiosk_start_resolves_to_configured_location() -> None:
    kiosk = Building(
        id="kiosk",
        name="Your Location (Kiosk)",
        type="Kiosk",
        location=GeoPoint(lat=-0.0001, lng=0.001),
    )
    service = _service(kiosk=kiosk)

    nav = service.route_between_buildings(start_id="kiosk", end_id="gym")

    assert nav.start_name == "Your Location (Kiosk)"
    assert nav.polyline[0] == kiosk.location


@pytest.mark.unit
def test_kiosk_without_configuration_is_unknown() -> None:
    with pytest.raises(BuildingNotFound):
        _service().route_between_buildings(start_id="kiosk", end_id="gym")
