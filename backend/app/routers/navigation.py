"""Sidebar and client-route resolution for the navigation shell."""

from fastapi import APIRouter, Depends, Query

from app.routers.auth import get_optional_session_context, get_session_context
from app.schemas.common import ApiResponse
from app.schemas.navigation import NavigationRead, NavItemRead, RouteDecisionRead
from app.services.navigation import build_navigation, resolve_route
from app.services.session import SessionContext

router = APIRouter()


@router.get("/navigation", response_model=ApiResponse[NavigationRead])
def get_navigation(
    path: str = Query(default="/dashboard"),
    collapsed: bool = Query(default=False),
    context: SessionContext = Depends(get_session_context),
) -> ApiResponse[NavigationRead]:
    """Menu entries visible to the current role, with the active entry marked."""

    view = build_navigation(context, path, collapsed=collapsed)
    return ApiResponse(
        data=NavigationRead(
            items=[NavItemRead.model_validate(item) for item in view.items],
            collapsed=view.collapsed,
            sidebar_width=view.sidebar_width,
            user_email=view.user_email,
            role_label=view.role_label,
        )
    )


@router.get("/routes/resolve", response_model=ApiResponse[RouteDecisionRead])
def get_route_decision(
    path: str = Query(..., min_length=1),
    context: SessionContext | None = Depends(get_optional_session_context),
) -> ApiResponse[RouteDecisionRead]:
    """Whether ``path`` renders, redirects, is forbidden or does not exist."""

    decision = resolve_route(path, context)
    return ApiResponse(
        data=RouteDecisionRead(
            path=decision.path,
            outcome=decision.outcome.value,
            redirect_to=decision.redirect_to,
        )
    )
