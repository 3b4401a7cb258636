# inventory/services/transactions.py

"""
DISPOSITION TRANSACTION RUNNER

Purpose:
- Run one disposition operation as ONE atomic unit.
- Bound lock waits (PostgreSQL lock_timeout, scoped to the transaction).
- Translate database failures into domain errors:
    - lock / serialization / deadlock failures -> TransactionConflict (retried)
    - anything else from the database          -> StorageFailure (never retried)

Rules:
- Retries only happen when this call owns the outermost transaction.
  Inside a caller's atomic block a failed attempt is surfaced immediately,
  because the caller's transaction decides what commits.
- A rolled-back attempt leaves no partial state behind.
"""

from __future__ import annotations

import logging
import time

from django.conf import settings
from django.db import DatabaseError, connection, transaction

from inventory.services.exceptions import StorageFailure, TransactionConflict

logger = logging.getLogger(__name__)


# deadlock_detected, serialization_failure, lock_not_available
CONFLICT_SQLSTATES = {"40P01", "40001", "55P03"}

CONFLICT_MESSAGES = (
    "database is locked",
    "database table is locked",
    "deadlock",
    "could not serialize",
    "lock timeout",
    "could not obtain lock",
)


def _max_retries() -> int:
    return int(getattr(settings, "INVENTORY_MAX_CONFLICT_RETRIES", 3))


def _retry_backoff_seconds() -> float:
    return float(getattr(settings, "INVENTORY_RETRY_BACKOFF_SECONDS", 0.05))


def _lock_timeout_ms() -> int:
    return int(getattr(settings, "INVENTORY_LOCK_TIMEOUT_MS", 5000))


def is_conflict_error(exc: BaseException) -> bool:
    cause = exc.__cause__ or exc
    sqlstate = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if sqlstate in CONFLICT_SQLSTATES:
        return True

    message = str(exc).lower()
    return any(marker in message for marker in CONFLICT_MESSAGES)


def _apply_lock_timeout() -> None:
    if connection.vendor != "postgresql":
        return
    timeout_ms = _lock_timeout_ms()
    if timeout_ms <= 0:
        return
    with connection.cursor() as cursor:
        # is_local=true -> reverts at COMMIT / ROLLBACK
        cursor.execute("SELECT set_config('lock_timeout', %s, true)", [f"{timeout_ms}ms"])


def run_disposition(operation: str, fn, **log_extra):
    """
    Execute fn() inside transaction.atomic(), retrying bounded times on conflicts.
    """
    retries = 0 if connection.in_atomic_block else max(_max_retries(), 0)
    attempt = 0

    while True:
        attempt += 1
        try:
            with transaction.atomic():
                _apply_lock_timeout()
                return fn()
        except DatabaseError as exc:
            if not is_conflict_error(exc):
                logger.exception(
                    "Disposition storage failure",
                    extra={"operation": operation, "attempt": attempt, **log_extra},
                )
                raise StorageFailure(f"{operation} failed: storage unavailable") from exc

            if attempt > retries:
                logger.warning(
                    "Disposition transaction conflict; giving up",
                    extra={"operation": operation, "attempts": attempt, **log_extra},
                )
                raise TransactionConflict(
                    f"{operation} conflicted with a concurrent update after {attempt} attempt(s); retry later"
                ) from exc

            logger.warning(
                "Disposition transaction conflict; retrying",
                extra={"operation": operation, "attempt": attempt, **log_extra},
            )
            time.sleep(_retry_backoff_seconds() * attempt)
