"""System user administration: profiles joined with role grants."""

from __future__ import annotations

import logging
from collections import defaultdict

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.auth import Profile, UserRole
from app.models.base import new_id, utc_now
from app.schemas.user import UserCreateRequest, UserRead
from app.services.gateway import GatewayError, RecordNotFoundError
from app.services.session import ROLE_ADMIN, ROLE_USER, sign_up

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def list_users(db: Session) -> list[UserRead]:
    """Profiles newest first, each with its role (``user`` when no grant exists)."""

    try:
        profiles = list(db.scalars(select(Profile).order_by(Profile.created_at.desc())).all())
        grants = db.execute(select(UserRole.user_id, UserRole.role)).all()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("users.list_failed error=%s", exc.__class__.__name__)
        raise GatewayError("Failed to fetch users") from exc

    roles_by_user: dict[str, set[str]] = defaultdict(set)
    for user_id, role in grants:
        roles_by_user[user_id].add(role)
    return [
        UserRead(
            id=profile.id,
            full_name=profile.full_name,
            email=profile.email,
            avatar_url=profile.avatar_url,
            is_active=profile.is_active,
            role=ROLE_ADMIN if ROLE_ADMIN in roles_by_user[profile.id] else ROLE_USER,
            created_at=profile.created_at,
        )
        for profile in profiles
    ]


def filter_users(users: list[UserRead], query: str | None) -> list[UserRead]:
    """Case-insensitive substring match on name or email."""

    needle = (query or "").strip().lower()
    if not needle:
        return list(users)
    return [
        user
        for user in users
        if needle in (user.full_name or "").lower() or needle in (user.email or "").lower()
    ]


def toggle_user_active(db: Session, user_id: str) -> Profile:
    profile = db.get(Profile, user_id)
    if profile is None:
        raise RecordNotFoundError("User not found")
    profile.is_active = not profile.is_active
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise GatewayError("Failed to update user status") from exc
    db.refresh(profile)
    logger.info("users.active_toggled user_id=%s is_active=%s", user_id, profile.is_active)
    return profile


def update_user_role(db: Session, user_id: str, role: str) -> str:
    """Make ``role`` the user's only grant.

    Upserts on (user_id, role) and drops the other grants; when the upsert is
    rejected, falls back to deleting every grant and inserting the new one.
    """

    if db.get(Profile, user_id) is None:
        raise RecordNotFoundError("User not found")
    try:
        _upsert_role(db, user_id, role)
    except (SQLAlchemyError, GatewayError) as exc:
        db.rollback()
        logger.info("users.role_upsert_rejected user_id=%s error=%s", user_id, exc.__class__.__name__)
        _replace_role(db, user_id, role)
    logger.info("users.role_updated user_id=%s role=%s", user_id, role)
    return role


def create_user(db: Session, payload: UserCreateRequest) -> UserRead:
    """Sign up the identity, then grant ``admin`` only when that role was requested."""

    user = sign_up(db, email=payload.email, password=payload.password, full_name=payload.full_name)
    if payload.role == ROLE_ADMIN:
        try:
            db.add(UserRole(user_id=user.id, role=ROLE_ADMIN))
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise GatewayError("Failed to assign role") from exc

    profile = db.get(Profile, user.id)
    return UserRead(
        id=user.id,
        full_name=profile.full_name,
        email=profile.email,
        avatar_url=profile.avatar_url,
        is_active=profile.is_active,
        role=payload.role,
        created_at=profile.created_at,
    )


def _upsert_role(db: Session, user_id: str, role: str) -> None:
    dialect = db.get_bind().dialect.name
    insert = _UPSERT_DIALECTS.get(dialect)
    if insert is None:
        raise GatewayError(f"Upsert is not supported on {dialect}")
    stmt = (
        insert(UserRole)
        .values(id=new_id(), user_id=user_id, role=role, created_at=utc_now())
        .on_conflict_do_nothing(index_elements=["user_id", "role"])
    )
    db.execute(stmt)
    db.execute(delete(UserRole).where(UserRole.user_id == user_id, UserRole.role != role))
    db.commit()


def _replace_role(db: Session, user_id: str, role: str) -> None:
    try:
        db.execute(delete(UserRole).where(UserRole.user_id == user_id))
        db.add(UserRole(user_id=user_id, role=role))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("users.role_update_failed user_id=%s error=%s", user_id, exc.__class__.__name__)
        raise GatewayError("Failed to update user role") from exc
