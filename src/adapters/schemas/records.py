from __future__ import annotations

from pydantic import BaseModel, Field


class LatLngSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class PathRecordSchema(BaseModel):
    id: str
    name: str | None = None
    nodes: list[LatLngSchema] = []


class BuildingRecordSchema(BaseModel):
    id: str
    name: str
    type: str = "Building"
    description: str | None = None
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class CampusDataSchema(BaseModel):
    buildings: list[BuildingRecordSchema] = []
    walkpaths: list[PathRecordSchema] = []
    drivepaths: list[PathRecordSchema] = []
