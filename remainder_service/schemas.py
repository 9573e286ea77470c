# remainder_service/schemas.py
"""
Pydantic v2 schemas for request/response validation.

This module defines all Pydantic models used for API request validation
and response serialization. Organized into sections:
- Remainder schemas (write payload, read model)
- Response envelopes (single record, paginated list, upcoming list)
- Error and health schemas

Response models serialize with camelCase aliases (``isActive``,
``createdAt``, ``currentPage``...), which FastAPI applies because
``response_model`` output is rendered ``by_alias``.
"""

import datetime as dt
import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from remainder_service.core.validation import (
    NAME_MAX_LENGTH,
    check_date_text,
    check_name,
    check_not_past,
    check_phone,
    check_time,
)
from remainder_service.models import Occasion, Relationship


class CamelModel(BaseModel):
    """Base for response models rendered with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Remainder Schemas
# ============================================================================


class RemainderWrite(BaseModel):
    """
    Payload for creating or fully replacing a remainder.

    Create and update share these rules; an update must carry every field.
    All string fields are trimmed before validation.

    Attributes:
        name: Who the remainder is about (1-100 chars).
        email: Owner's email, lower-cased after validation.
        phone: Owner's phone number, optional leading ``+`` then up to 16 digits.
        occasion: One of the ``Occasion`` values.
        date: ISO calendar date, today or later.
        time: Time of day, ``HH:MM`` 24-hour.
        relationship: One of the ``Relationship`` values.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "examples": [
                {
                    "name": "Alice",
                    "email": "alice@example.com",
                    "phone": "+15551234567",
                    "occasion": "birthday",
                    "date": "2030-01-15",
                    "time": "09:30",
                    "relationship": "friend",
                }
            ]
        },
    )

    name: str = Field(..., max_length=NAME_MAX_LENGTH)
    email: EmailStr
    phone: str
    occasion: Occasion
    date: dt.date
    time: str
    relationship: Relationship

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: object) -> object:
        """
        Require a non-empty name of at most 100 characters after trimming.

        Runs before the length constraint so that both failures carry
        readable messages.

        Raises:
            ValueError: If the trimmed name is empty or too long.
        """
        if isinstance(v, str):
            return check_name(v)
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Lower-case the whole address, local part included."""
        return v.lower()

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        """
        Validate phone number format.

        Raises:
            ValueError: If the number does not match ``^\\+?[1-9]\\d{0,15}$``.
        """
        return check_phone(v)

    @field_validator("date", mode="before")
    @classmethod
    def require_iso_date(cls, v: object) -> object:
        """
        Only accept ``YYYY-MM-DD`` text, never a numeric timestamp.

        Raises:
            ValueError: If the input is not an ISO calendar date string.
        """
        return check_date_text(v)

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: dt.date) -> dt.date:
        """
        Reject dates before today.

        Raises:
            ValueError: If the date is in the past.
        """
        return check_not_past(v)

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        """
        Validate 24-hour ``HH:MM`` time.

        Raises:
            ValueError: If hours are outside 00-23 or minutes outside 00-59.
        """
        return check_time(v)


class RemainderRead(CamelModel):
    """
    Schema for reading remainder data.

    Includes store-generated fields in addition to the write fields.

    Attributes:
        id: Remainder's unique identifier.
        is_active: Reserved flag (``isActive``).
        created_at: Insert timestamp (``createdAt``).
        updated_at: Last update timestamp (``updatedAt``).
    """

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )

    id: uuid.UUID
    name: str
    email: str
    phone: str
    occasion: Occasion
    date: dt.date
    time: str
    relationship: Relationship
    is_active: bool
    created_at: dt.datetime
    updated_at: dt.datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, v: dt.datetime) -> dt.datetime:
        """Render timestamps in UTC; naive values read back from SQLite are UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=dt.UTC)
        return v.astimezone(dt.UTC)


# ============================================================================
# Response Envelopes
# ============================================================================


class PaginationMeta(CamelModel):
    """
    Pagination block of a list response.

    Attributes:
        current_page: Requested page (``currentPage``).
        total_pages: ``ceil(totalCount / limit)`` (``totalPages``).
        total_count: Records matching the filter (``totalCount``).
        has_next: More records exist past this page (``hasNext``).
        has_prev: This is not the first page (``hasPrev``).
    """

    current_page: int
    total_pages: int
    total_count: int
    has_next: bool
    has_prev: bool


class RemainderResponse(BaseModel):
    """Envelope carrying a single remainder."""

    success: bool = True
    message: str
    data: RemainderRead


class RemainderListResponse(BaseModel):
    """Envelope carrying one page of remainders and its pagination block."""

    success: bool = True
    message: str
    data: list[RemainderRead]
    pagination: PaginationMeta


class UpcomingRemaindersResponse(BaseModel):
    """Envelope carrying every remainder in the upcoming window."""

    success: bool = True
    message: str
    data: list[RemainderRead]
    count: int


# ============================================================================
# Generic Schemas
# ============================================================================


class FieldError(BaseModel):
    """
    One offending field of a rejected request.

    Attributes:
        field: Dotted field name (``id`` for a malformed path identifier).
        location: Where the field came from: body, query or path.
        message: What is wrong with it.
        value: The rejected input, when it is a scalar.
    """

    field: str
    location: str
    message: str
    value: str | int | float | bool | None = None


class ErrorResponse(BaseModel):
    """Failure envelope shared by every error response."""

    success: bool = False
    message: str
    errors: list[FieldError] | None = None


class HealthResponse(BaseModel):
    """Liveness probe payload."""

    success: bool = True
    message: str
    timestamp: dt.datetime
