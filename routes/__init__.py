from . import walking_routes
from . import users
from . import progress
from . import saved_routes

__all__ = [
    "walking_routes",
    "users",
    "progress",
    "saved_routes",
]
