"""ORM models package exports."""

from app.models.auth import AuthSession, AuthUser, Profile, UserRole
from app.models.employee import Employee
from app.models.menu_item import MenuItem
from app.models.reference import Area, Award

__all__ = [
    "Area",
    "AuthSession",
    "AuthUser",
    "Award",
    "Employee",
    "MenuItem",
    "Profile",
    "UserRole",
]
