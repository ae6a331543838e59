"""
Page-window pagination for list endpoints.

Unlike DRF's ``PageNumberPagination`` the window here never raises for a
page past the end: the caller gets exactly the page it asked for, empty if
need be, together with the totals it needs to clamp its own navigation.

    window = paginate_queryset(qs, page=2, limit=6)
    window.items, window.current_page, window.total_pages, window.total_items

Results are stable: the same parameters against an unmodified table always
return the same rows, because an unordered queryset is ordered by primary
key before slicing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from django.db.models import QuerySet

DEFAULT_PAGE_SIZE = 6
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageWindow:
    """One page of results plus the totals describing the whole result set."""

    items: list[Any] = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 0
    total_items: int = 0


def paginate_queryset(
    queryset: QuerySet,
    *,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> PageWindow:
    """
    Slice ``queryset`` into the requested page.

    Args:
        queryset: Filtered queryset.  Should carry a deterministic
                  ``order_by``; ``pk`` ordering is applied otherwise.
        page:     1-based page number.  Not clamped to ``total_pages``.
        limit:    Page size, ``1 <= limit <= MAX_PAGE_SIZE``.

    Raises:
        ValueError: If ``page`` or ``limit`` is out of range.  Request
                    serializers validate both before this is reached.
    """
    if page < 1:
        raise ValueError("page must be >= 1")
    if not 1 <= limit <= MAX_PAGE_SIZE:
        raise ValueError(f"limit must be between 1 and {MAX_PAGE_SIZE}")

    if not queryset.ordered:
        queryset = queryset.order_by("pk")

    total_items = queryset.count()
    offset = (page - 1) * limit
    items = list(queryset[offset:offset + limit]) if offset < total_items else []

    return PageWindow(
        items=items,
        current_page=page,
        total_pages=math.ceil(total_items / limit),
        total_items=total_items,
    )
