"""Page window arithmetic and pagination-control model."""

from __future__ import annotations

import math
from dataclasses import dataclass

MAX_PAGE_LINKS = 5


@dataclass(frozen=True)
class PageWindow:
    current_page: int
    page_size: int
    total_count: int

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.page_size

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_count, self.page_size)


@dataclass(frozen=True)
class PageLink:
    page: int
    active: bool


@dataclass(frozen=True)
class PaginationControl:
    links: tuple[PageLink, ...]
    previous_disabled: bool
    next_disabled: bool
    visible: bool


def total_pages(total_count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be positive")
    return math.ceil(max(total_count, 0) / page_size)


def clamp_page(page: int, pages: int) -> int:
    """Keep a requested page inside ``1..pages`` (page 1 when there are none)."""

    return min(max(page, 1), max(pages, 1))


def build_pagination(window: PageWindow) -> PaginationControl:
    """Links for pages ``1..min(5, total_pages)`` plus previous/next state.

    The control is only shown when there is more than one page.
    """

    pages = window.total_pages
    links = tuple(
        PageLink(page=page, active=page == window.current_page)
        for page in range(1, min(MAX_PAGE_LINKS, pages) + 1)
    )
    return PaginationControl(
        links=links,
        previous_disabled=window.current_page <= 1,
        next_disabled=window.current_page >= pages,
        visible=pages > 1,
    )
