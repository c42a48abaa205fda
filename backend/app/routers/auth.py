"""Sign-up, sign-in, sign-out and the per-request session dependencies."""

from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.db.dependencies import get_db
from app.schemas.auth import IdentityRead, SessionRead, SignInRequest, SignUpRequest
from app.schemas.common import ApiResponse
from app.services.session import (
    AuthError,
    SessionContext,
    SignUpError,
    close_session,
    open_session,
    resolve_session,
    sign_up,
)

router = APIRouter(prefix="/auth")


def bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    """Token from an ``Authorization: Bearer <token>`` header, if any."""

    if not authorization:
        return None
    scheme, _, value = authorization.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


def get_session_context(
    token: str | None = Depends(bearer_token),
    db: Session = Depends(get_db),
) -> SessionContext:
    try:
        return resolve_session(db, token)
    except AuthError as exc:
        status_code = 403 if exc.message == "Account is deactivated" else 401
        raise HTTPException(status_code=status_code, detail=exc.message) from exc


def get_optional_session_context(
    token: str | None = Depends(bearer_token),
    db: Session = Depends(get_db),
) -> SessionContext | None:
    if token is None:
        return None
    try:
        return resolve_session(db, token)
    except AuthError:
        return None


def require_admin(context: SessionContext = Depends(get_session_context)) -> SessionContext:
    if not context.is_admin:
        raise HTTPException(status_code=403, detail="Administrator access required")
    return context


@router.post("/signup", response_model=ApiResponse[IdentityRead], status_code=201)
def post_sign_up(payload: SignUpRequest, db: Session = Depends(get_db)) -> ApiResponse[IdentityRead]:
    """Register credentials and the matching profile."""

    try:
        user = sign_up(db, email=payload.email, password=payload.password, full_name=payload.full_name)
    except SignUpError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    identity = IdentityRead(
        user_id=user.id,
        email=user.email,
        full_name=payload.full_name,
        role="user",
        is_admin=False,
    )
    return ApiResponse(data=identity, message="Account created successfully")


@router.post("/login", response_model=ApiResponse[SessionRead])
def post_sign_in(payload: SignInRequest, db: Session = Depends(get_db)) -> ApiResponse[SessionRead]:
    """Verify credentials and issue a bearer token."""

    try:
        token, context = open_session(db, email=payload.email, password=payload.password)
    except AuthError as exc:
        status_code = 403 if exc.message == "Account is deactivated" else 401
        raise HTTPException(status_code=status_code, detail=exc.message) from exc
    return ApiResponse(
        data=SessionRead(access_token=token, identity=IdentityRead.model_validate(context)),
        message="Signed in successfully",
    )


@router.post("/logout", response_model=ApiResponse[bool])
def post_sign_out(
    token: str | None = Depends(bearer_token),
    db: Session = Depends(get_db),
) -> ApiResponse[bool]:
    """Revoke the presented token; signing out twice is harmless."""

    return ApiResponse(data=close_session(db, token), message="Signed out")


@router.get("/me", response_model=ApiResponse[IdentityRead])
def get_me(context: SessionContext = Depends(get_session_context)) -> ApiResponse[IdentityRead]:
    return ApiResponse(data=IdentityRead.model_validate(context))
