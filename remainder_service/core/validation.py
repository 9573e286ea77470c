# remainder_service/core/validation.py
"""
Field rules shared by the request schemas and the ORM model.

The same checks run twice on every write: once when the request body is
parsed into a schema, and again when values are assigned to a
``Remainder`` row. Each checker returns the normalized value or raises
``ValueError`` with a client-facing message.
"""

import re
from datetime import date, datetime

from email_validator import EmailNotValidError, validate_email

NAME_MAX_LENGTH = 100

# International digits with an optional leading plus, no leading zero
PHONE_PATTERN = re.compile(r"^\+?[1-9][0-9]{0,15}$")

# 24-hour HH:MM
TIME_PATTERN = re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$")

# Calendar date, YYYY-MM-DD
DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")

PHONE_MESSAGE = "Please enter a valid phone number"
TIME_MESSAGE = "Please enter time in HH:MM format (24-hour)"
EMAIL_MESSAGE = "Please enter a valid email"
PAST_DATE_MESSAGE = "Date cannot be in the past"
DATE_MESSAGE = "Please enter a valid date"


def check_name(value: str) -> str:
    """Trim a name and enforce presence and maximum length."""
    value = value.strip()
    if not value:
        raise ValueError("Name is required")
    if len(value) > NAME_MAX_LENGTH:
        raise ValueError(f"Name cannot exceed {NAME_MAX_LENGTH} characters")
    return value


def check_email(value: str) -> str:
    """
    Validate an email address and return it lower-cased.

    Deliverability (DNS) is not checked, matching Pydantic's ``EmailStr``.

    Raises:
        ValueError: If the address is not syntactically valid.
    """
    value = value.strip()
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(EMAIL_MESSAGE) from e
    return value.lower()


def check_phone(value: str) -> str:
    """Trim a phone number and match it against ``PHONE_PATTERN``."""
    value = value.strip()
    if not PHONE_PATTERN.match(value):
        raise ValueError(PHONE_MESSAGE)
    return value


def check_time(value: str) -> str:
    """Trim a time of day and match it against ``TIME_PATTERN``."""
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError(TIME_MESSAGE)
    return value


def check_not_past(value: date, today: date | None = None) -> date:
    """
    Reject calendar dates before today.

    Args:
        value: The date to check.
        today: Reference date (default: current local date).

    Returns:
        The unchanged date.

    Raises:
        ValueError: If ``value`` is strictly before ``today``.
    """
    if today is None:
        today = date.today()
    if value < today:
        raise ValueError(PAST_DATE_MESSAGE)
    return value


def check_date_text(value: object) -> object:
    """
    Accept a date object or a ``YYYY-MM-DD`` string, nothing else.

    Numbers and other string shapes would otherwise be read as Unix
    timestamps by the date parser.

    Raises:
        ValueError: If ``value`` is neither a date nor an ISO date string.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, str) and DATE_PATTERN.match(value.strip()):
        return value.strip()
    raise ValueError(DATE_MESSAGE)
