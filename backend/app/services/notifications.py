"""User-facing operation notices (the panel's toast messages)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

logger = logging.getLogger(__name__)

NoticeLevel = Literal["success", "error"]


@dataclass(frozen=True)
class Notification:
    level: NoticeLevel
    title: str
    message: str


@dataclass
class NotificationLog:
    """Ordered notices raised by one table or page controller."""

    source: str
    items: list[Notification] = field(default_factory=list)

    def success(self, message: str) -> Notification:
        notice = Notification(level="success", title="Success", message=message)
        self.items.append(notice)
        logger.info("notice.success source=%s message=%s", self.source, message)
        return notice

    def error(self, message: str) -> Notification:
        notice = Notification(level="error", title="Error", message=message)
        self.items.append(notice)
        logger.warning("notice.error source=%s message=%s", self.source, message)
        return notice

    @property
    def last(self) -> Notification | None:
        return self.items[-1] if self.items else None
