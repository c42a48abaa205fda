"""Menu configuration schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.forms import blank_to_none


class MenuItemForm(BaseModel):
    """Dialog payload; the two visibility checkboxes become ``visible_to_roles``."""

    title: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=200)
    icon: str | None = Field(default=None, max_length=50)
    path: str = Field(min_length=1, max_length=100)
    display_order: int = Field(default=0, ge=0)
    is_active: bool = True
    visible_to_admin: bool = True
    visible_to_user: bool = True

    @field_validator("description", "icon")
    @classmethod
    def optional_text(cls, value: str | None) -> str | None:
        return blank_to_none(value)

    def visible_to_roles(self) -> list[str]:
        roles: list[str] = []
        if self.visible_to_admin:
            roles.append("admin")
        if self.visible_to_user:
            roles.append("user")
        return roles


class MenuItemDraft(BaseModel):
    """Initial dialog values; unlike the form, blanks are allowed."""

    title: str = ""
    description: str | None = None
    icon: str | None = None
    path: str = ""
    display_order: int = 0
    is_active: bool = True
    visible_to_admin: bool = True
    visible_to_user: bool = True


class MenuItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None
    icon: str | None
    path: str
    display_order: int
    is_active: bool
    visible_to_roles: list[str]
    created_at: datetime
