# remainder_service/deps.py
"""
FastAPI dependencies for the record store and common parameters.

This module provides dependency injection components for:
- Database session management
- The ``RemainderStore`` used by request handlers
- Owner lookup and pagination query parameters
- The "email or phone required" precondition

Query parameters are validated field by field here; failures surface as
``RequestValidationError`` and are rendered as 400 responses. The
cross-field owner rule is checked separately by ``require_owner_filter``
so each field rule stays independently testable.
"""

from typing import Annotated

from fastapi import Depends, Query
from pydantic import EmailStr

from remainder_service.core.config import get_settings
from remainder_service.core.errors import BadRequestError
from remainder_service.core.validation import PHONE_PATTERN
from remainder_service.db import DBSession
from remainder_service.repository import (
    RemainderFilter,
    RemainderStore,
    SqlAlchemyRemainderStore,
)

settings = get_settings()

OWNER_REQUIRED_MESSAGE = "Email or phone number is required"

# Keeps page * limit inside a 32-bit OFFSET
MAX_PAGE = 100_000


def get_remainder_store(session: DBSession) -> RemainderStore:
    """
    Provide the record store for the current request.

    Args:
        session: Request-scoped database session.

    Returns:
        A ``RemainderStore`` bound to the session.
    """
    return SqlAlchemyRemainderStore(session)


# Record store dependency
Store = Annotated[RemainderStore, Depends(get_remainder_store)]


class OwnerQueryParams:
    """
    Owner lookup parameters shared by the listing endpoints.

    Attributes:
        email: Lower-cased owner email, or None.
        phone: Owner phone number, or None.
    """

    def __init__(
        self,
        email: Annotated[
            EmailStr | None,
            Query(description="Owner email (case-insensitive)"),
        ] = None,
        phone: Annotated[
            str | None,
            Query(
                pattern=PHONE_PATTERN.pattern,
                description="Owner phone number, e.g. +15551234567",
            ),
        ] = None,
    ):
        """
        Initialize owner parameters.

        Args:
            email: Owner email address.
            phone: Owner phone number.
        """
        self.email = email.lower() if email else None
        self.phone = phone

    def to_filter(self) -> RemainderFilter:
        """Equality filter on whichever of email and phone were supplied."""
        return RemainderFilter(email=self.email, phone=self.phone)


class PaginationParams:
    """
    Page-based pagination parameters.

    Attributes:
        page: 1-based page number (1-100000, default: 1).
        limit: Page size (1-100, default: 10).
    """

    def __init__(
        self,
        page: Annotated[
            int,
            Query(ge=1, le=MAX_PAGE, description="Page number, starting at 1"),
        ] = 1,
        limit: Annotated[
            int,
            Query(ge=1, le=100, description="Maximum number of items per page"),
        ] = settings.default_page_size,
    ):
        """
        Initialize pagination parameters.

        Args:
            page: Page number.
            limit: Maximum items per page.
        """
        self.page = page
        self.limit = limit


Owner = Annotated[OwnerQueryParams, Depends()]
Pagination = Annotated[PaginationParams, Depends()]


def require_owner_filter(owner: OwnerQueryParams) -> RemainderFilter:
    """
    Enforce that at least one of email or phone was supplied.

    Args:
        owner: Parsed owner parameters.

    Returns:
        The equality filter for the supplied field(s).

    Raises:
        BadRequestError: If neither email nor phone is present.
    """
    if not owner.email and not owner.phone:
        raise BadRequestError(OWNER_REQUIRED_MESSAGE)
    return owner.to_filter()
