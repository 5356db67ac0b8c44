from .routing import BuildingNotFound, NoPathFound, RoutingError

__all__ = [
    "BuildingNotFound",
    "NoPathFound",
    "RoutingError",
]
