"""Shared pagination and filter helpers for payment and invoice listings."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from billing.exceptions import BillingError

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageRequest:
    page: int
    size: int

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page:
    """One slice of a filtered, ordered result set."""

    content: list[Any] = field(default_factory=list)
    total_elements: int = 0
    page: int = DEFAULT_PAGE
    size: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0


def page_request(page: int | None, size: int | None, error_cls: type[BillingError]) -> PageRequest:
    """Apply pagination defaults and bounds, raising ``error_cls`` on violation."""
    if page is not None and page < 0:
        raise error_cls("Page number must be >= 0")
    if size is not None and not 1 <= size <= MAX_PAGE_SIZE:
        raise error_cls(f"Page size must be between 1 and {MAX_PAGE_SIZE}")

    return PageRequest(
        page=DEFAULT_PAGE if page is None else page,
        size=DEFAULT_PAGE_SIZE if size is None else size,
    )


def provided(value: str | None) -> bool:
    """Blank strings count as "not provided" for listing filters."""
    return value is not None and value.strip() != ""


def parse_status(raw: str | None, status_enum: type[Enum], error_cls: type[BillingError]):
    """Parse a status filter case-insensitively; ``None`` when not provided."""
    if not provided(raw):
        return None
    try:
        return status_enum[raw.strip().upper()]
    except KeyError:
        raise error_cls(f"Invalid status value: {raw}") from None
