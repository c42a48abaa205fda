"""System user administration schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from app.schemas.forms import validate_email

RoleName = Literal["admin", "user"]


class UserCreateRequest(BaseModel):
    email: str = Field(max_length=255)
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=2, max_length=100)
    role: RoleName = "user"

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return validate_email(value)


class RoleUpdateRequest(BaseModel):
    role: RoleName


class UserRead(BaseModel):
    """Profile joined with its role grant."""

    id: str
    full_name: str | None
    email: str | None
    avatar_url: str | None
    is_active: bool
    role: RoleName
    created_at: datetime
