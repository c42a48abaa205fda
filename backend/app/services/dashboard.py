"""Dashboard summary counts."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.models.auth import Profile
from app.models.employee import Employee
from app.models.menu_item import MenuItem
from app.services.gateway import TableGateway
from app.services.session import SessionContext


@dataclass(frozen=True)
class StatCard:
    title: str
    value: int
    description: str
    admin_only: bool


def dashboard_cards(db: Session, context: SessionContext) -> list[StatCard]:
    """Counts per table; employee and user cards are shown to admins only."""

    cards = [
        StatCard(
            title="Total Employees",
            value=TableGateway(db, Employee).count(),
            description="Active employees in the system",
            admin_only=True,
        ),
        StatCard(
            title="Total Users",
            value=TableGateway(db, Profile).count(),
            description="Registered system users",
            admin_only=True,
        ),
        StatCard(
            title="Menu Items",
            value=TableGateway(db, MenuItem).count(),
            description="Configured menu items",
            admin_only=False,
        ),
    ]
    return [card for card in cards if context.is_admin or not card.admin_only]
