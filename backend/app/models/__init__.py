"""ORM models package export."""

from app.models.engine import Engine
from app.models.user import Role, User, user_roles
from app.models.vehicle import Car, Motorcycle

__all__ = [
    "Car",
    "Engine",
    "Motorcycle",
    "Role",
    "User",
    "user_roles",
]
