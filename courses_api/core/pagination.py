from dataclasses import dataclass
from typing import Dict

from courses_api.core.database import MAX_ID


@dataclass(frozen=True)
class PageRequest:
    """Resolved page number and page size"""
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class InvalidPagination(ValueError):
    """Rejected page or limit; field names the offending parameter"""

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field


def resolve_pagination(
    page: int = 1,
    limit: int = 10,
    max_limit: int = 100,
) -> PageRequest:
    """
    Validate page/limit and bound the page size.

    Pages start at 1; page 0 and negative pages are rejected. A limit above
    max_limit is clamped rather than rejected, a limit below 1 is rejected.
    Pages whose offset would not fit a BIGINT are rejected too.
    """
    if page < 1:
        raise InvalidPagination("Page must be >= 1", "page")

    if limit < 1:
        raise InvalidPagination("Limit must be >= 1", "limit")

    resolved = PageRequest(page=page, limit=min(limit, max_limit))
    if resolved.offset > MAX_ID:
        raise InvalidPagination("Page is out of range", "page")

    return resolved


def total_pages(total_items: int, limit: int) -> int:
    """ceil(total_items / limit); an empty set has zero pages."""
    return -(-total_items // limit)


def page_metadata(page: PageRequest, total_items: int) -> Dict[str, int]:
    return {
        "currentPage": page.page,
        "perPage": page.limit,
        "totalItems": total_items,
        "totalPages": total_pages(total_items, page.limit),
    }
