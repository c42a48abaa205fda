"""Reference table models edited through the generic CRUD table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, IdMixin, TimestampMixin


class Area(Base, IdMixin, TimestampMixin):
    """Named work area."""

    __tablename__ = "area"

    name: Mapped[str] = mapped_column(String(255), nullable=False)


class Award(Base, IdMixin, TimestampMixin):
    """Named award."""

    __tablename__ = "award"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
