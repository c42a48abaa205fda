"""Self-service profile: details, password and avatar."""

from __future__ import annotations

import logging
import secrets
from pathlib import PurePosixPath

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.auth import Profile
from app.schemas.profile import PasswordChangeRequest, ProfileUpdateRequest
from app.services.gateway import GatewayError, RecordNotFoundError
from app.services.session import change_password
from app.services.storage import ObjectStorage

logger = logging.getLogger(__name__)

AVATAR_BUCKET = "avatars"


def get_profile(db: Session, user_id: str) -> Profile:
    profile = db.get(Profile, user_id)
    if profile is None:
        raise RecordNotFoundError("Profile not found")
    return profile


def update_profile(db: Session, user_id: str, payload: ProfileUpdateRequest) -> Profile:
    profile = get_profile(db, user_id)
    profile.full_name = payload.full_name
    profile.email = payload.email
    _commit(db, "Failed to update profile")
    db.refresh(profile)
    return profile


def update_password(db: Session, user_id: str, payload: PasswordChangeRequest) -> None:
    change_password(db, user_id, payload.new_password)


def avatar_object_path(user_id: str, filename: str | None) -> str:
    """``{user_id}/{random}.{ext}`` inside the avatars bucket."""

    suffix = PurePosixPath(filename or "").suffix.lstrip(".").lower() or "bin"
    return f"{user_id}/{secrets.token_hex(8)}.{suffix}"


def upload_avatar(
    db: Session,
    storage: ObjectStorage,
    user_id: str,
    *,
    filename: str | None,
    content: bytes,
) -> Profile:
    """Store the file, then persist its public URL on the profile."""

    profile = get_profile(db, user_id)
    object_path = avatar_object_path(user_id, filename)
    storage.upload(AVATAR_BUCKET, object_path, content, upsert=True)
    profile.avatar_url = storage.get_public_url(AVATAR_BUCKET, object_path)
    _commit(db, "Failed to update avatar")
    db.refresh(profile)
    return profile


def _commit(db: Session, message: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("profile.commit_failed error=%s", exc.__class__.__name__)
        raise GatewayError(message) from exc
