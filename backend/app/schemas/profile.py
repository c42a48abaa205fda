"""Self-service profile schemas."""

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from app.schemas.forms import validate_email


class ProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str | None
    email: str | None
    avatar_url: str | None
    is_active: bool


class ProfileUpdateRequest(BaseModel):
    full_name: str = Field(min_length=1, max_length=100)
    email: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return validate_email(value)


class PasswordChangeRequest(BaseModel):
    new_password: str = Field(min_length=6)
    confirm_password: str

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        if "new_password" in info.data and value != info.data["new_password"]:
            raise ValueError("Passwords don't match")
        return value
