"""Employee form and response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.forms import blank_to_none, validate_email


class EmployeeForm(BaseModel):
    """Create/edit payload for one employee."""

    full_name: str = Field(min_length=2, max_length=100)
    email: str = Field(max_length=255)
    position: str | None = Field(default=None, max_length=100)
    department: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=20)

    @field_validator("full_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return validate_email(value)

    @field_validator("position", "department", "phone")
    @classmethod
    def optional_text(cls, value: str | None) -> str | None:
        return blank_to_none(value)


class EmployeeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    email: str
    position: str | None
    department: str | None
    phone: str | None
    created_at: datetime
    updated_at: datetime
