"""Pagination — pure coercion of raw page/limit parameters and page metadata.

Invariants:
    - page >= 1 always; unparsable or absent page becomes DEFAULT_PAGE
    - 1 <= limit <= MAX_LIMIT always; unparsable or absent limit becomes DEFAULT_LIMIT
    - Out-of-range pages never raise: they produce an empty slice
    - total_pages = ceil(total_items / limit); has_next/has_prev derive from it

Design Decisions:
    - Raw query strings parsed by leading integer prefix ("3abc" -> 3, "2.9" -> 2),
      so clients sending sloppy numbers still get a sensible page
    - PageRequest is frozen: offset and limit are computed once and handed to the query
"""

import math
import re
from dataclasses import dataclass

from dog_adoption.core.domain_types import DogStatus


DEFAULT_PAGE: int = 1
DEFAULT_LIMIT: int = 10
MAX_LIMIT: int = 50

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Longer digit runs saturate instead of building arbitrarily large ints
_MAX_DIGITS: int = 18
_PARAM_CEILING: int = 10**18


@dataclass(frozen=True)
class PageRequest:
    """A validated page window."""
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def parse_int_param(raw: str | int | None) -> int | None:
    """Parse the leading integer of a raw query value. None when unparsable."""
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    text = match.group(1)
    if len(text.lstrip("+-")) > _MAX_DIGITS:
        return -_PARAM_CEILING if text.startswith("-") else _PARAM_CEILING
    return int(text)


def build_page_request(
    raw_page: str | int | None, raw_limit: str | int | None,
) -> PageRequest:
    """Coerce raw page/limit into a PageRequest. Never raises."""
    page = parse_int_param(raw_page)
    limit = parse_int_param(raw_limit)
    if page is None:
        page = DEFAULT_PAGE
    if limit is None:
        limit = DEFAULT_LIMIT
    return PageRequest(
        page=max(1, page),
        limit=min(MAX_LIMIT, max(1, limit)),
    )


def build_pagination(total_items: int, request: PageRequest) -> dict:
    """Page metadata for a result window. Pure, no IO."""
    total_pages = math.ceil(total_items / request.limit)
    return {
        "current_page": request.page,
        "total_pages": total_pages,
        "total_items": total_items,
        "has_next": request.page < total_pages,
        "has_prev": request.page > 1,
    }


def parse_status_filter(raw: str | None) -> DogStatus | None:
    """Known status values filter; anything else is silently ignored."""
    if raw is None:
        return None
    try:
        return DogStatus(raw)
    except ValueError:
        return None
