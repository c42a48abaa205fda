"""SQLAlchemy metadata registry import for Alembic."""

from app.models import (
    Area,
    AuthSession,
    AuthUser,
    Award,
    Employee,
    MenuItem,
    Profile,
    UserRole,
)
from app.models.base import Base

__all__ = [
    "Base",
    "Area",
    "AuthSession",
    "AuthUser",
    "Award",
    "Employee",
    "MenuItem",
    "Profile",
    "UserRole",
]
