class RoutingError(Exception):
    """Base exception for route calculation failures."""


class NoPathFound(RoutingError):
    """Raised when no path network is available for the given request."""


class BuildingNotFound(RoutingError):
    """Raised when a route endpoint does not match any known building."""
