"""Authentication request/response schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.forms import validate_email


class SignInRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return validate_email(value)


class SignUpRequest(SignInRequest):
    password: str = Field(min_length=6)
    full_name: str | None = Field(default=None, max_length=100)


class IdentityRead(BaseModel):
    """Identity and role for the current session."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    email: str
    full_name: str | None
    role: str
    is_admin: bool


class SessionRead(BaseModel):
    access_token: str
    token_type: str = "bearer"
    identity: IdentityRead
