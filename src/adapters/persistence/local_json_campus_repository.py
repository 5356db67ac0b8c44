from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path as FsPath

from src.adapters.schemas.records import (
    BuildingRecordSchema,
    CampusDataSchema,
    PathRecordSchema,
)
from src.app.ports.output import IBuildingRepository, IPathRepository
from src.domain.models import Building, GeoPoint, Path, TravelMode


def _path_from_record(record: PathRecordSchema) -> Path:
    return Path(
        id=record.id,
        name=record.name,
        nodes=tuple(GeoPoint(lat=n.lat, lng=n.lng) for n in record.nodes),
    )


def _building_from_record(record: BuildingRecordSchema) -> Building:
    return Building(
        id=record.id,
        name=record.name,
        type=record.type,
        location=GeoPoint(lat=record.lat, lng=record.lng),
    )


@dataclass(slots=True)
class LocalJsonCampusRepository(IPathRepository, IBuildingRepository):
    """Reads buildings, walkpaths and drivepaths from one JSON document.

    The parsed document is cached per file modification time, so a route
    request parses the file once and later edits still show up.

    Env vars:
      - CAMPUS_DATA_PATH: path to the JSON file (default data/campus.json)
    """

    data_path: str | FsPath | None = None
    _cached: tuple[tuple[FsPath, int], CampusDataSchema] | None = field(
        default=None, init=False, repr=False
    )

    def _file(self) -> FsPath:
        value = self.data_path or os.getenv("CAMPUS_DATA_PATH") or "data/campus.json"
        return FsPath(value)

    def load(self) -> CampusDataSchema:
        path = self._file()
        if not path.exists():
            raise FileNotFoundError(f"Campus data file not found: {path}")
        stamp = (path, path.stat().st_mtime_ns)
        if self._cached is not None and self._cached[0] == stamp:
            return self._cached[1]

        data = CampusDataSchema.model_validate_json(path.read_text(encoding="utf-8"))
        self._cached = (stamp, data)
        return data

    def list_paths(self, mode: TravelMode) -> list[Path]:
        data = self.load()
        records = data.walkpaths if mode is TravelMode.WALKING else data.drivepaths
        return [_path_from_record(r) for r in records]

    def list_buildings(self) -> list[Building]:
        return [_building_from_record(r) for r in self.load().buildings]

    def get_building(self, building_id: str) -> Building | None:
        for building in self.list_buildings():
            if building.id == building_id:
                return building
        return None
