"""Navigation shell schemas."""

from pydantic import BaseModel, ConfigDict


class NavItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    path: str
    icon: str
    active: bool
    show_label: bool
    tooltip: str | None


class NavigationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    items: list[NavItemRead]
    collapsed: bool
    sidebar_width: int
    user_email: str
    role_label: str


class RouteDecisionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    path: str
    outcome: str
    redirect_to: str | None
