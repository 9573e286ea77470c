# remainder_service/services/listing.py
"""
Arithmetic behind the listing endpoints.

- ``page_offset`` turns a 1-based page number into a row offset.
- ``build_pagination`` derives the pagination block of a list response.
- ``upcoming_window`` computes the inclusive date range of the
  "upcoming" view.
"""

import math
from datetime import date, timedelta

from remainder_service.schemas import PaginationMeta


def page_offset(page: int, limit: int) -> int:
    """Number of rows to skip before ``page`` when pages hold ``limit`` rows."""
    return (page - 1) * limit


def build_pagination(page: int, limit: int, total: int, returned: int) -> PaginationMeta:
    """
    Build pagination metadata for one page of a listing.

    Args:
        page: Requested 1-based page number.
        limit: Page size.
        total: Number of records matching the filter, ignoring pagination.
        returned: Number of records actually returned for this page.

    Returns:
        PaginationMeta where ``totalPages = ceil(total / limit)``,
        ``hasNext`` is true while records remain past this page, and
        ``hasPrev`` is true for every page after the first.
    """
    skip = page_offset(page, limit)
    return PaginationMeta(
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_count=total,
        has_next=skip + returned < total,
        has_prev=page > 1,
    )


def upcoming_window(today: date | None = None, days: int = 7) -> tuple[date, date]:
    """
    Inclusive date range covered by the upcoming view.

    Args:
        today: Reference date (default: current local date).
        days: Length of the window after ``today``.

    Returns:
        Tuple of (first day, last day), both inclusive.
    """
    if today is None:
        today = date.today()
    return today, today + timedelta(days=days)
