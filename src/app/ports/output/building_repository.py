from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import Building


class IBuildingRepository(ABC):
    """Port for looking up route endpoints."""

    @abstractmethod
    def list_buildings(self) -> list[Building]:
        """Return all known buildings."""

    @abstractmethod
    def get_building(self, building_id: str) -> Building | None:
        """Return the building with the given id, or None."""
