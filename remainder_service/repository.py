# remainder_service/repository.py
"""
Record store for remainders - pure data access layer.

``RemainderStore`` is the capability the request handlers depend on:
insert, find, count, update and delete over a ``RemainderFilter``.
``SqlAlchemyRemainderStore`` implements it on top of a SQLAlchemy session.
Handlers only see the abstract class, so the backend can be replaced by
overriding the ``get_remainder_store`` dependency.

All listings are ordered by ``(date, time)`` ascending. Because ``time`` is
stored as zero-padded ``HH:MM`` text, lexical order equals chronological
order.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from remainder_service.core.errors import StoreConstraintError
from remainder_service.models import Remainder, utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemainderFilter:
    """
    Conjunction of predicates applied to remainder queries.

    Attributes:
        email: Exact (already lower-cased) email to match.
        phone: Exact phone number to match.
        date_from: Inclusive lower bound on ``date``.
        date_to: Inclusive upper bound on ``date``.
    """

    email: str | None = None
    phone: str | None = None
    date_from: date | None = None
    date_to: date | None = None


class RemainderStore(ABC):
    """Abstract persistence capability for remainder records."""

    @abstractmethod
    def insert(self, fields: dict[str, Any]) -> Remainder:
        """Store a new record and return it with its assigned id."""

    @abstractmethod
    def find_by_id(self, remainder_id: uuid.UUID) -> Remainder | None:
        """Return the record with the given id, or None."""

    @abstractmethod
    def find_many(
        self,
        criteria: RemainderFilter,
        *,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Remainder]:
        """Return matching records ordered by (date, time)."""

    @abstractmethod
    def count(self, criteria: RemainderFilter) -> int:
        """Return the number of matching records, ignoring pagination."""

    @abstractmethod
    def update_by_id(
        self, remainder_id: uuid.UUID, fields: dict[str, Any]
    ) -> Remainder | None:
        """Overwrite the given fields and return the updated record, or None."""

    @abstractmethod
    def delete_by_id(self, remainder_id: uuid.UUID) -> Remainder | None:
        """Delete the record and return its last state, or None."""


class SqlAlchemyRemainderStore(RemainderStore):
    """
    ``RemainderStore`` backed by a SQLAlchemy session.

    The session's transaction is owned by the caller (the ``get_session``
    dependency commits or rolls back); this class only flushes so that ids,
    timestamps and database constraints are resolved before returning.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize the store.

        Args:
            session: Database session used for every operation.
        """
        self.session = session

    def _apply(self, stmt: Select[Any], criteria: RemainderFilter) -> Select[Any]:
        """Add the filter's predicates to a statement."""
        if criteria.email is not None:
            stmt = stmt.where(Remainder.email == criteria.email)
        if criteria.phone is not None:
            stmt = stmt.where(Remainder.phone == criteria.phone)
        if criteria.date_from is not None:
            stmt = stmt.where(Remainder.date >= criteria.date_from)
        if criteria.date_to is not None:
            stmt = stmt.where(Remainder.date <= criteria.date_to)
        return stmt

    def _flush(self) -> None:
        """Flush pending changes, translating integrity failures."""
        try:
            self.session.flush()
        except IntegrityError as e:
            self.session.rollback()
            raise StoreConstraintError(
                "Record violates storage constraints"
            ) from e

    def insert(self, fields: dict[str, Any]) -> Remainder:
        """Create a new remainder from validated fields."""
        remainder = Remainder(**fields)
        self.session.add(remainder)
        self._flush()
        logger.info("Created remainder %s", remainder.id)
        return remainder

    def find_by_id(self, remainder_id: uuid.UUID) -> Remainder | None:
        """Get a remainder by ID."""
        stmt = select(Remainder).where(Remainder.id == remainder_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def find_many(
        self,
        criteria: RemainderFilter,
        *,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Remainder]:
        """List remainders matching ``criteria`` ordered by date then time."""
        stmt = self._apply(select(Remainder), criteria)
        stmt = stmt.order_by(Remainder.date, Remainder.time, Remainder.created_at)
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.execute(stmt).scalars().all())

    def count(self, criteria: RemainderFilter) -> int:
        """Count remainders matching ``criteria``."""
        stmt = self._apply(select(func.count(Remainder.id)), criteria)
        return self.session.execute(stmt).scalar() or 0

    def update_by_id(
        self, remainder_id: uuid.UUID, fields: dict[str, Any]
    ) -> Remainder | None:
        """Replace the given fields of an existing remainder."""
        remainder = self.find_by_id(remainder_id)
        if remainder is None:
            return None
        for field, value in fields.items():
            setattr(remainder, field, value)
        remainder.updated_at = utcnow()
        self._flush()
        logger.info("Updated remainder %s", remainder_id)
        return remainder

    def delete_by_id(self, remainder_id: uuid.UUID) -> Remainder | None:
        """Hard-delete a remainder."""
        remainder = self.find_by_id(remainder_id)
        if remainder is None:
            return None
        self.session.delete(remainder)
        self._flush()
        logger.info("Deleted remainder %s", remainder_id)
        return remainder
