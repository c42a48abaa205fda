"""Dashboard statistics schemas."""

from pydantic import BaseModel, ConfigDict


class StatCardRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    value: int
    description: str
