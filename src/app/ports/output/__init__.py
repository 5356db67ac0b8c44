from .building_repository import IBuildingRepository
from .path_repository import IPathRepository

__all__ = [
    "IBuildingRepository",
    "IPathRepository",
]
