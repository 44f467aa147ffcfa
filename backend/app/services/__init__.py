"""Service layer exports."""
from app.services import (
    auth_service,
    engine_service,
    notification_service,
    password_reset_service,
    user_service,
    vehicle_service,
)

__all__ = [
    "auth_service",
    "engine_service",
    "notification_service",
    "password_reset_service",
    "user_service",
    "vehicle_service",
]
