"""Atomic conditional writes.

``transact`` runs a guard UPDATE (compare-and-swap on the row the caller observed) and,
only if the guard matched, the dependent writes, all in one database transaction.
Either every effect commits or none does.
"""
import logging
import time
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy import Update
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from booking_core.errors import ConflictError, TransientServiceError

LOG = logging.getLogger(__name__)

T = TypeVar("T")


def transact(
    session: Session,
    guard: Update,
    writes: Callable[[Session], T],
    *,
    conflict_message: str,
) -> T:
    """Apply guard; if it updates exactly one row run writes(session) and commit.

    Raises ConflictError when the guard matches no row or a unique constraint rejects the
    writes, TransientServiceError when the database is unavailable. The session is rolled
    back on every failure.
    """
    try:
        # The guard must open its own transaction. On SQLite a read transaction cannot wait
        # for a competing writer when it upgrades, so end the caller's reads first.
        if session.in_transaction():
            session.commit()
        result = session.execute(guard.execution_options(synchronize_session=False))
        if result.rowcount != 1:
            raise ConflictError(conflict_message)
        value = writes(session)
        session.commit()
        return value
    except ConflictError:
        session.rollback()
        raise
    except IntegrityError as e:
        session.rollback()
        raise ConflictError(conflict_message) from e
    except OperationalError as e:
        session.rollback()
        LOG.warning("Storage error during transaction: %s", e)
        raise TransientServiceError("Storage temporarily unavailable, please retry") from e
    except Exception:
        session.rollback()
        raise


def retry_transient(operation: Callable[[], T], *, attempts: int = 3, delay_s: float = 0.2) -> T:
    """Call operation, retrying only TransientServiceError, at most `attempts` times in total.

    Conflicts and other errors propagate immediately.
    """
    if attempts < 1:
        raise ValueError("attempts must be >= 1")
    for attempt in range(1, attempts + 1):
        try:
            return operation()
        except TransientServiceError:
            if attempt == attempts:
                raise
            LOG.warning("Transient storage error (attempt %d/%d), retrying", attempt, attempts)
            time.sleep(delay_s * attempt)
    raise AssertionError("unreachable")
