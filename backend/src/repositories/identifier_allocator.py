"""
Primary-key allocation for application-assigned identifiers.

Two policies coexist:

- Sequential (patients, consultations): ``max(existing id) + 1``, or 1 for an
  empty table. The read runs inside the caller's transaction, right before
  the insert that uses the value.
- Random-sparse (professionals): a uniform draw from a small fixed range with
  no existence check.

Neither policy reserves the value it returns. Two allocations racing between
read and insert can return the same identifier; the primary key constraint
rejects the second insert and the creating repository retries with a fresh
value (see ``insert_with_fresh_id``).
"""

import enum
import logging
import random
from typing import Callable, Dict, Optional, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import InstrumentedAttribute, Session
from sqlalchemy.orm.exc import FlushError

from core.config import ID_ALLOCATION_MAX_ATTEMPTS
from core.constants import PROFESSIONAL_ID_MAX, PROFESSIONAL_ID_MIN
from core.exceptions import StorageError, classify_storage_error
from models import Consultation, Patient

logger = logging.getLogger(__name__)

T = TypeVar('T')


class EntityKind(str, enum.Enum):
    """Entities whose primary keys are assigned by the application."""
    PATIENT = "patient"
    PROFESSIONAL = "professional"
    CONSULTATION = "consultation"


class IdentifierAllocator:
    """Produces a candidate primary key for a new row."""

    def next_id(self, db: Session) -> int:
        raise NotImplementedError


class SequentialAllocator(IdentifierAllocator):
    """``max(existing) + 1`` over the given primary key column."""

    def __init__(self, column: InstrumentedAttribute[int]):
        self.column = column

    def next_id(self, db: Session) -> int:
        """
        Read the next identifier from current storage state.

        Raises:
            StorageError: If the read fails. There is no fallback value:
                silently returning 1 would collide with an existing row.
        """
        try:
            next_value = db.execute(
                select(func.coalesce(func.max(self.column), 0) + 1)
            ).scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read next id for {self.column}: {e}")
            raise StorageError(f"Could not allocate an identifier for {self.column.class_.__tablename__}") from e
        return int(next_value)


class RandomSparseAllocator(IdentifierAllocator):
    """Uniform draw in ``[low, high]`` with no collision check."""

    def __init__(self, low: int = PROFESSIONAL_ID_MIN, high: int = PROFESSIONAL_ID_MAX, rng: Optional[random.Random] = None):
        if low > high:
            raise ValueError(f"Empty identifier range [{low}, {high}]")
        self.low = low
        self.high = high
        self.rng = rng or random.Random()

    def next_id(self, db: Session) -> int:
        return self.rng.randint(self.low, self.high)


_ALLOCATORS: Dict[EntityKind, IdentifierAllocator] = {
    EntityKind.PATIENT: SequentialAllocator(Patient.id),
    EntityKind.CONSULTATION: SequentialAllocator(Consultation.id),
    EntityKind.PROFESSIONAL: RandomSparseAllocator(),
}


def allocator_for(kind: EntityKind) -> IdentifierAllocator:
    """Return the allocation policy registered for an entity kind."""
    return _ALLOCATORS[kind]


def next_id(db: Session, kind: EntityKind) -> int:
    """Allocate a candidate identifier for a new row of the given kind."""
    return allocator_for(kind).next_id(db)


def insert_with_fresh_id(
    db: Session,
    allocator: IdentifierAllocator,
    build_row: Callable[[int], T],
    action: str,
    max_attempts: int = ID_ALLOCATION_MAX_ATTEMPTS,
) -> T:
    """
    Allocate an identifier, insert the row built for it and flush.

    On a primary key collision the whole transaction is rolled back and a new
    identifier is tried, up to ``max_attempts`` times. Nothing is committed
    here: the caller continues in the same transaction and commits once.

    Args:
        db: Database session
        allocator: Identifier policy to draw from
        build_row: Builds the ORM instance for a given identifier
        action: Description used in log and error messages
        max_attempts: Maximum number of identifiers tried

    Returns:
        The flushed ORM instance

    Raises:
        StorageError: If every attempt collided or the insert failed for another reason
        ReferentialConflictError: If the insert violated a foreign key
    """
    for attempt in range(1, max_attempts + 1):
        candidate = allocator.next_id(db)
        row = build_row(candidate)
        db.add(row)
        try:
            db.flush()
            return row
        except (IntegrityError, FlushError) as e:
            db.rollback()
            # Only a taken identifier is worth another draw
            if attempt == max_attempts or db.get(type(row), candidate) is None:
                raise classify_storage_error(e, action) from e
            logger.warning(f"Identifier {candidate} rejected while trying to {action} (attempt {attempt}/{max_attempts}), retrying")
        except SQLAlchemyError as e:
            db.rollback()
            raise classify_storage_error(e, action) from e
    raise StorageError(f"Could not {action}: no identifier attempts allowed")
