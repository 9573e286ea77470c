# remainder_service/routers/remainders.py
"""
Remainders API router with CRUD and listing endpoints.

This module provides endpoints for managing remainders:
- Create new remainders
- List remainders of an owner with pagination
- List an owner's remainders in the next seven days
- Get single remainder by ID
- Full remainder updates
- Delete remainders

Endpoints are unauthenticated; listings are scoped by the ``email`` and/or
``phone`` query parameters. Each handler validates its input, performs a
single store call and wraps the result in the success envelope.
"""

import uuid

from fastapi import APIRouter, status

from remainder_service.core.config import get_settings
from remainder_service.core.errors import NotFoundError
from remainder_service.deps import Owner, Pagination, Store, require_owner_filter
from remainder_service.repository import RemainderFilter
from remainder_service.schemas import (
    ErrorResponse,
    RemainderListResponse,
    RemainderRead,
    RemainderResponse,
    RemainderWrite,
    UpcomingRemaindersResponse,
)
from remainder_service.services.listing import (
    build_pagination,
    page_offset,
    upcoming_window,
)

settings = get_settings()

router = APIRouter(prefix="/remainders", tags=["remainders"])

NOT_FOUND_MESSAGE = "Remainder not found"

_BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Validation failed"}}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": NOT_FOUND_MESSAGE}}


@router.post(
    "",
    response_model=RemainderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new remainder",
    responses=_BAD_REQUEST,
)
def create_remainder(data: RemainderWrite, store: Store) -> RemainderResponse:
    """
    Create a new remainder.

    Args:
        data: Validated remainder fields.
        store: Record store.

    Returns:
        Envelope with the created remainder, including its generated ID.
    """
    remainder = store.insert(data.model_dump())
    return RemainderResponse(
        message="Remainder created successfully",
        data=RemainderRead.model_validate(remainder),
    )


@router.get(
    "",
    response_model=RemainderListResponse,
    summary="List remainders by email or phone",
    responses=_BAD_REQUEST,
)
def list_remainders(
    store: Store,
    owner: Owner,
    pagination: Pagination,
) -> RemainderListResponse:
    """
    List an owner's remainders, one page at a time.

    Records are matched on the supplied email and/or phone (AND semantics
    when both are given) and ordered by date then time.

    Args:
        store: Record store.
        owner: Email/phone filter; at least one is required.
        pagination: Page number and page size.

    Returns:
        Envelope with the page of remainders and pagination metadata.

    Raises:
        BadRequestError: If neither email nor phone was supplied.
    """
    criteria = require_owner_filter(owner)
    skip = page_offset(pagination.page, pagination.limit)

    remainders = store.find_many(criteria, skip=skip, limit=pagination.limit)
    total = store.count(criteria)

    return RemainderListResponse(
        message="Remainders retrieved successfully",
        data=[RemainderRead.model_validate(r) for r in remainders],
        pagination=build_pagination(
            pagination.page, pagination.limit, total, len(remainders)
        ),
    )


@router.get(
    "/upcoming",
    response_model=UpcomingRemaindersResponse,
    summary="List remainders due in the next seven days",
    responses=_BAD_REQUEST,
)
def list_upcoming_remainders(
    store: Store,
    owner: Owner,
) -> UpcomingRemaindersResponse:
    """
    List an owner's remainders dated from today to seven days ahead.

    Both ends of the window are inclusive and the result is not paginated.

    Args:
        store: Record store.
        owner: Email/phone filter; at least one is required.

    Returns:
        Envelope with the matching remainders and their count.

    Raises:
        BadRequestError: If neither email nor phone was supplied.
    """
    owner_filter = require_owner_filter(owner)
    date_from, date_to = upcoming_window(days=settings.upcoming_window_days)
    criteria = RemainderFilter(
        email=owner_filter.email,
        phone=owner_filter.phone,
        date_from=date_from,
        date_to=date_to,
    )

    remainders = store.find_many(criteria)
    return UpcomingRemaindersResponse(
        message="Upcoming remainders retrieved successfully",
        data=[RemainderRead.model_validate(r) for r in remainders],
        count=len(remainders),
    )


@router.get(
    "/{remainder_id}",
    response_model=RemainderResponse,
    summary="Get a remainder by ID",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
)
def get_remainder(remainder_id: uuid.UUID, store: Store) -> RemainderResponse:
    """
    Get a single remainder by its ID.

    Args:
        remainder_id: The remainder's UUID; malformed values are rejected
            with 400 before the store is queried.
        store: Record store.

    Returns:
        Envelope with the remainder.

    Raises:
        NotFoundError: If no remainder has this ID.
    """
    remainder = store.find_by_id(remainder_id)
    if remainder is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return RemainderResponse(
        message="Remainder retrieved successfully",
        data=RemainderRead.model_validate(remainder),
    )


@router.put(
    "/{remainder_id}",
    response_model=RemainderResponse,
    summary="Full update of a remainder",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
)
def update_remainder(
    remainder_id: uuid.UUID,
    data: RemainderWrite,
    store: Store,
) -> RemainderResponse:
    """
    Replace every writable field of a remainder.

    The payload is validated exactly like a create; ``id``, ``isActive``
    and ``createdAt`` are left untouched.

    Args:
        remainder_id: The remainder's UUID.
        data: Complete remainder data.
        store: Record store.

    Returns:
        Envelope with the updated remainder.

    Raises:
        NotFoundError: If no remainder has this ID.
    """
    remainder = store.update_by_id(remainder_id, data.model_dump())
    if remainder is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return RemainderResponse(
        message="Remainder updated successfully",
        data=RemainderRead.model_validate(remainder),
    )


@router.delete(
    "/{remainder_id}",
    response_model=RemainderResponse,
    summary="Delete a remainder",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
)
def delete_remainder(remainder_id: uuid.UUID, store: Store) -> RemainderResponse:
    """
    Permanently delete a remainder.

    Args:
        remainder_id: The remainder's UUID.
        store: Record store.

    Returns:
        Envelope with the deleted remainder's last state.

    Raises:
        NotFoundError: If no remainder has this ID.
    """
    remainder = store.delete_by_id(remainder_id)
    if remainder is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return RemainderResponse(
        message="Remainder deleted successfully",
        data=RemainderRead.model_validate(remainder),
    )
