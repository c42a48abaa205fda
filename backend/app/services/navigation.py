"""Role-gated sidebar menu and route access decisions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from app.services.session import SessionContext

AUTH_PATH = "/auth"
HOME_PATH = "/dashboard"
SIDEBAR_WIDTH_EXPANDED = 256
SIDEBAR_WIDTH_COLLAPSED = 64


@dataclass(frozen=True)
class MenuEntry:
    label: str
    path: str
    icon: str
    admin_only: bool = False


SIDEBAR_MENU: tuple[MenuEntry, ...] = (
    MenuEntry(label="Dashboard", path="/dashboard", icon="layout-dashboard"),
    MenuEntry(label="Employees", path="/employees", icon="users", admin_only=True),
    MenuEntry(label="Users", path="/users", icon="user-cog", admin_only=True),
    MenuEntry(label="Menu Config", path="/menu-config", icon="settings", admin_only=True),
    MenuEntry(label="Area", path="/area", icon="map-pin"),
    MenuEntry(label="Award", path="/award", icon="award"),
    MenuEntry(label="Profile", path="/profile", icon="user"),
)

# path -> requires admin
ROUTES: dict[str, bool] = {
    "/dashboard": False,
    "/employees": True,
    "/users": True,
    "/menu-config": True,
    "/profile": False,
    "/area": False,
    "/award": False,
}


class RouteOutcome(str, Enum):
    ALLOW = "allow"
    REDIRECT = "redirect"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RouteDecision:
    path: str
    outcome: RouteOutcome
    redirect_to: str | None = None


@dataclass(frozen=True)
class NavItem:
    label: str
    path: str
    icon: str
    active: bool
    show_label: bool
    tooltip: str | None


@dataclass(frozen=True)
class NavigationView:
    items: tuple[NavItem, ...]
    collapsed: bool
    sidebar_width: int
    user_email: str
    role_label: str


def visible_menu(context: SessionContext) -> list[MenuEntry]:
    return [entry for entry in SIDEBAR_MENU if not entry.admin_only or context.is_admin]


def build_navigation(context: SessionContext, current_path: str, *, collapsed: bool = False) -> NavigationView:
    """Filter the menu by role and mark the entry whose path equals ``current_path``."""

    items = tuple(
        NavItem(
            label=entry.label,
            path=entry.path,
            icon=entry.icon,
            active=entry.path == current_path,
            show_label=not collapsed,
            tooltip=entry.label if collapsed else None,
        )
        for entry in visible_menu(context)
    )
    return NavigationView(
        items=items,
        collapsed=collapsed,
        sidebar_width=SIDEBAR_WIDTH_COLLAPSED if collapsed else SIDEBAR_WIDTH_EXPANDED,
        user_email=context.email,
        role_label="Administrator" if context.is_admin else "User",
    )


def resolve_route(path: str, context: SessionContext | None) -> RouteDecision:
    """Decide what a client-side route resolves to for the given session."""

    clean = path.strip() or "/"
    if len(clean) > 1:
        clean = clean.rstrip("/")
    if clean == "/":
        return RouteDecision(path=clean, outcome=RouteOutcome.REDIRECT, redirect_to=HOME_PATH)
    if clean == AUTH_PATH:
        if context is not None:
            return RouteDecision(path=clean, outcome=RouteOutcome.REDIRECT, redirect_to=HOME_PATH)
        return RouteDecision(path=clean, outcome=RouteOutcome.ALLOW)
    if clean not in ROUTES:
        return RouteDecision(path=clean, outcome=RouteOutcome.NOT_FOUND)
    if context is None:
        return RouteDecision(path=clean, outcome=RouteOutcome.REDIRECT, redirect_to=AUTH_PATH)
    if ROUTES[clean] and not context.is_admin:
        return RouteDecision(path=clean, outcome=RouteOutcome.FORBIDDEN)
    return RouteDecision(path=clean, outcome=RouteOutcome.ALLOW)
