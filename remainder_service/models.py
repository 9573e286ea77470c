# remainder_service/models.py
"""
SQLAlchemy 2.0 ORM models.

This module defines the database model for the Remainder Service:
- Remainder: A dated reminder owned by an email address and phone number

The model re-validates every writable field when it is assigned, so a
write that skips the request schemas still cannot store malformed data.

All models use SQLAlchemy 2.0 declarative mapping with type annotations.
"""

import datetime as dt
import uuid
from enum import Enum as PyEnum

from sqlalchemy import Boolean, Date, DateTime, Enum, Index, String, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, validates

from remainder_service.core.errors import StoreConstraintError
from remainder_service.core.validation import (
    DATE_MESSAGE,
    NAME_MAX_LENGTH,
    check_email,
    check_name,
    check_not_past,
    check_phone,
    check_time,
)


def utcnow() -> dt.datetime:
    """Return the current time as an aware UTC datetime."""
    return dt.datetime.now(dt.UTC)


class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Provides the declarative base for SQLAlchemy models. All models
    should inherit from this class.
    """

    pass


class Occasion(str, PyEnum):
    """Kinds of occasion a remainder can be created for."""

    BIRTHDAY = "birthday"
    ANNIVERSARY = "anniversary"
    MEETING = "meeting"
    APPOINTMENT = "appointment"
    OTHER = "other"


class Relationship(str, PyEnum):
    """Relationship between the owner and the person the remainder is about."""

    FATHER = "father"
    MOTHER = "mother"
    BROTHER = "brother"
    SISTER = "sister"
    FRIEND = "friend"
    COLLEAGUE = "colleague"
    SPOUSE = "spouse"
    CHILD = "child"
    OTHER = "other"


class Remainder(Base):
    """
    Remainder model representing a single dated reminder.

    Records are scoped by their ``email`` and ``phone`` values rather than by
    an authenticated owner. Listing queries filter on those two columns and
    on ``date``, hence the compound ``(email, date)`` index.

    Attributes:
        id: Primary key, random UUID assigned on insert.
        name: Name of the person the remainder is about (max 100 chars).
        email: Owner's email address, always stored lower-cased.
        phone: Owner's phone number in international digits format.
        occasion: Kind of occasion (closed set).
        date: Calendar date of the occasion; never in the past when written.
        time: Time of day as ``HH:MM`` (24-hour).
        relationship: Relationship to the owner (closed set).
        is_active: Reserved flag, defaults to True and is never changed.
        created_at: Insert timestamp (UTC).
        updated_at: Last update timestamp (UTC).
    """

    __tablename__ = "remainders"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    occasion: Mapped[Occasion] = mapped_column(
        Enum(
            Occasion,
            name="remainder_occasion",
            native_enum=False,
            create_constraint=True,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time: Mapped[str] = mapped_column(String(5), nullable=False)
    relationship: Mapped[Relationship] = mapped_column(
        Enum(
            Relationship,
            name="remainder_relationship",
            native_enum=False,
            create_constraint=True,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    __table_args__ = (Index("ix_remainders_email_date", "email", "date"),)

    @validates("name", "email", "phone", "time", "date")
    def _validate_field(self, key: str, value: object) -> object:
        """Re-check a written field, raising ``StoreConstraintError`` on failure."""
        checks = {
            "name": check_name,
            "email": check_email,
            "phone": check_phone,
            "time": check_time,
        }
        if value is None:
            raise StoreConstraintError(f"{key} is required", field=key)
        try:
            if key == "date":
                if not isinstance(value, dt.date):
                    raise ValueError(DATE_MESSAGE)
                return check_not_past(value)
            if not isinstance(value, str):
                raise ValueError(f"{key} must be a string")
            return checks[key](value)
        except ValueError as e:
            raise StoreConstraintError(str(e), field=key) from e

    @validates("occasion", "relationship")
    def _validate_choice(self, key: str, value: object) -> object:
        """Accept only members of the column's enum, never coercing other text."""
        enum_cls = Occasion if key == "occasion" else Relationship
        try:
            return enum_cls(value)
        except ValueError as e:
            raise StoreConstraintError(
                f"{value} is not a valid {key} type", field=key
            ) from e

    def __repr__(self) -> str:
        """Return string representation of Remainder."""
        return f"<Remainder(id={self.id}, email='{self.email}', date={self.date})>"
