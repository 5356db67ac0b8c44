from .local_json_campus_repository import LocalJsonCampusRepository

__all__ = [
    "LocalJsonCampusRepository",
]
