from __future__ import annotations

PAGE_LINK_LIMIT = 10


def clamp_page(page: int, total_pages: int) -> int:
    return max(1, min(max(1, total_pages), page))


def page_numbers(total_pages: int, limit: int = PAGE_LINK_LIMIT) -> list[int]:
    """Page links shown under a list: the first ``limit`` pages."""
    return list(range(1, min(limit, max(0, total_pages)) + 1))


def format_date(value: str | None) -> str:
    if not value:
        return ""
    return value[:10]


def format_datetime(value: str | None) -> str:
    if not value:
        return ""
    return value.replace("T", " ")[:19]


class Paginator:
    """1-based page cursor; out-of-range targets clamp to the valid range."""

    def __init__(self, current_page: int = 1, total_pages: int = 1):
        self.total_pages = max(1, total_pages)
        self.current_page = clamp_page(current_page, self.total_pages)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def page_numbers(self) -> list[int]:
        return page_numbers(self.total_pages)

    def target(self, page: int) -> int:
        return clamp_page(page, self.total_pages)

    def next_page(self) -> int:
        return self.target(self.current_page + 1)

    def previous_page(self) -> int:
        return self.target(self.current_page - 1)

    def update_total(self, total_pages: int) -> None:
        self.total_pages = max(1, total_pages)
        self.current_page = clamp_page(self.current_page, self.total_pages)
