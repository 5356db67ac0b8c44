from .building import Building
from .geo import GeoPoint
from .graph import Edge, GraphNode, Projection
from .path import Path
from .route import NavigationRoute, RouteResult, RouteStatus, RouteStep, TravelMode

__all__ = [
    "Building",
    "Edge",
    "GeoPoint",
    "GraphNode",
    "NavigationRoute",
    "Path",
    "Projection",
    "RouteResult",
    "RouteStatus",
    "RouteStep",
    "TravelMode",
]
