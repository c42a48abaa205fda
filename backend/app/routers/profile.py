"""Self-service profile routes for the signed-in user."""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from app.db.dependencies import get_db
from app.routers.auth import get_session_context
from app.schemas.common import ApiResponse
from app.schemas.profile import PasswordChangeRequest, ProfileRead, ProfileUpdateRequest
from app.services.profile import get_profile, update_password, update_profile, upload_avatar
from app.services.session import SessionContext
from app.services.storage import ObjectStorage, get_storage

router = APIRouter(prefix="/profile")


@router.get("", response_model=ApiResponse[ProfileRead])
def get_own_profile(
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> ApiResponse[ProfileRead]:
    return ApiResponse(data=ProfileRead.model_validate(get_profile(db, context.user_id)))


@router.put("", response_model=ApiResponse[ProfileRead])
def put_own_profile(
    payload: ProfileUpdateRequest,
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> ApiResponse[ProfileRead]:
    profile = update_profile(db, context.user_id, payload)
    return ApiResponse(data=ProfileRead.model_validate(profile), message="Profile updated successfully")


@router.put("/password", response_model=ApiResponse[bool])
def put_password(
    payload: PasswordChangeRequest,
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> ApiResponse[bool]:
    update_password(db, context.user_id, payload)
    return ApiResponse(data=True, message="Password changed successfully")


@router.post("/avatar", response_model=ApiResponse[ProfileRead])
def post_avatar(
    file: UploadFile = File(...),
    context: SessionContext = Depends(get_session_context),
    storage: ObjectStorage = Depends(get_storage),
    db: Session = Depends(get_db),
) -> ApiResponse[ProfileRead]:
    """Store the uploaded image and point the profile at its public URL."""

    profile = upload_avatar(
        db,
        storage,
        context.user_id,
        filename=file.filename,
        content=file.file.read(),
    )
    return ApiResponse(data=ProfileRead.model_validate(profile), message="Avatar updated successfully")
