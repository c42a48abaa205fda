"""System user administration routes (administrators only)."""

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from app.db.dependencies import get_db
from app.routers.auth import require_admin
from app.schemas.common import ApiResponse
from app.schemas.profile import ProfileRead
from app.schemas.user import RoleUpdateRequest, UserCreateRequest, UserRead
from app.services.users import create_user, filter_users, list_users, toggle_user_active, update_user_role

router = APIRouter(prefix="/users", dependencies=[Depends(require_admin)])

UserIdParam = Path(..., min_length=1)


@router.get("", response_model=ApiResponse[list[UserRead]])
def get_users(
    q: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> ApiResponse[list[UserRead]]:
    """Profiles with their role, newest first."""

    return ApiResponse(data=filter_users(list_users(db), q))


@router.post("", response_model=ApiResponse[UserRead], status_code=201)
def post_user(payload: UserCreateRequest, db: Session = Depends(get_db)) -> ApiResponse[UserRead]:
    """Register an account and grant the requested role."""

    return ApiResponse(data=create_user(db, payload), message="User created successfully")


@router.post("/{user_id}/toggle-active", response_model=ApiResponse[ProfileRead])
def post_toggle_active(user_id: str = UserIdParam, db: Session = Depends(get_db)) -> ApiResponse[ProfileRead]:
    profile = toggle_user_active(db, user_id)
    state = "activated" if profile.is_active else "deactivated"
    return ApiResponse(data=ProfileRead.model_validate(profile), message=f"User {state} successfully")


@router.put("/{user_id}/role", response_model=ApiResponse[RoleUpdateRequest])
def put_user_role(
    payload: RoleUpdateRequest,
    user_id: str = UserIdParam,
    db: Session = Depends(get_db),
) -> ApiResponse[RoleUpdateRequest]:
    role = update_user_role(db, user_id, payload.role)
    return ApiResponse(data=RoleUpdateRequest(role=role), message="User role updated successfully")
