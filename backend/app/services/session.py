"""Authenticated session context: sign-up, sign-in, resolution and sign-out."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.models.auth import AuthSession, AuthUser, Profile, UserRole
from app.services.security import (
    digest_secret,
    generate_token,
    hash_password,
    parse_token,
    secret_matches,
    verify_password,
)

logger = logging.getLogger(__name__)

ROLE_ADMIN = "admin"
ROLE_USER = "user"


class AuthError(Exception):
    """Credentials or session token were rejected."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SignUpError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class SessionContext:
    """Identity and role resolved once per session; never mutated locally."""

    user_id: str
    email: str
    full_name: str | None
    role: str
    token_id: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def normalize_email(email: str) -> str:
    return email.strip().lower()


def sign_up(db: Session, *, email: str, password: str, full_name: str | None = None) -> AuthUser:
    """Create credentials and the matching profile row."""

    clean_email = normalize_email(email)
    user = AuthUser(email=clean_email, password_hash=hash_password(password))
    try:
        db.add(user)
        db.flush()
        db.add(Profile(id=user.id, full_name=full_name, email=clean_email, is_active=True))
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise SignUpError("User already registered") from exc
    db.refresh(user)
    logger.info("auth.sign_up user_id=%s", user.id)
    return user


def get_user_role(db: Session, user_id: str) -> str:
    """``admin`` when an admin grant exists, otherwise the implicit ``user`` role."""

    roles = set(db.scalars(select(UserRole.role).where(UserRole.user_id == user_id)).all())
    return ROLE_ADMIN if ROLE_ADMIN in roles else ROLE_USER


def open_session(
    db: Session,
    *,
    email: str,
    password: str,
    ttl: timedelta | None = None,
) -> tuple[str, SessionContext]:
    """Verify credentials and issue a session token."""

    user = db.scalar(select(AuthUser).where(AuthUser.email == normalize_email(email)))
    if user is None or not verify_password(password, user.password_hash):
        raise AuthError("Invalid login credentials")
    profile = db.get(Profile, user.id)
    if profile is not None and not profile.is_active:
        raise AuthError("Account is deactivated")

    lifetime = ttl or timedelta(hours=get_settings().session_ttl_hours)
    token_id, secret, token = generate_token()
    db.add(
        AuthSession(
            token_id=token_id,
            user_id=user.id,
            secret_digest=digest_secret(secret),
            expires_at=datetime.now(timezone.utc) + lifetime,
        )
    )
    db.commit()
    logger.info("auth.sign_in user_id=%s token_id=%s", user.id, token_id)
    return token, _build_context(db, user, profile, token_id)


def resolve_session(db: Session, token: str | None) -> SessionContext:
    """Load identity and role for a bearer token."""

    parsed = parse_token(token)
    if parsed is None:
        raise AuthError("Authentication required")
    record = db.get(AuthSession, parsed.token_id)
    if record is None or not secret_matches(parsed.secret, record.secret_digest):
        raise AuthError("Invalid session")
    if _as_utc(record.expires_at) <= datetime.now(timezone.utc):
        db.delete(record)
        db.commit()
        raise AuthError("Session expired")
    user = db.get(AuthUser, record.user_id)
    if user is None:
        raise AuthError("Invalid session")
    profile = db.get(Profile, user.id)
    if profile is not None and not profile.is_active:
        raise AuthError("Account is deactivated")
    return _build_context(db, user, profile, record.token_id)


def close_session(db: Session, token: str | None) -> bool:
    """Revoke a session token; returns whether a session was removed."""

    parsed = parse_token(token)
    if parsed is None:
        return False
    result = db.execute(delete(AuthSession).where(AuthSession.token_id == parsed.token_id))
    db.commit()
    if result.rowcount:
        logger.info("auth.sign_out token_id=%s", parsed.token_id)
    return bool(result.rowcount)


def change_password(db: Session, user_id: str, new_password: str) -> None:
    user = db.get(AuthUser, user_id)
    if user is None:
        raise AuthError("User not found")
    user.password_hash = hash_password(new_password)
    db.commit()
    logger.info("auth.password_changed user_id=%s", user_id)


def _build_context(db: Session, user: AuthUser, profile: Profile | None, token_id: str) -> SessionContext:
    return SessionContext(
        user_id=user.id,
        email=user.email,
        full_name=profile.full_name if profile is not None else None,
        role=get_user_role(db, user.id),
        token_id=token_id,
    )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
