from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import Path, TravelMode


class IPathRepository(ABC):
    """Port for retrieving the digitized path network of one travel mode."""

    @abstractmethod
    def list_paths(self, mode: TravelMode) -> list[Path]:
        """Return every path of the given mode (walkpaths or drivepaths)."""
