# inventory/services/donations.py

"""
======================================================
PATH: inventory/services/donations.py
======================================================
DONATION ALLOCATOR

Purpose:
- Move a quantity of ONE batch to a recipient, atomically:
    lock batch -> check sufficiency -> append DonationRecord -> decrement batch
- Batch reaches DONATED only when its quantity hits exactly zero.

Rules:
- All validation happens BEFORE any mutation.
- Insufficient quantity performs no mutation at all.
- NOT idempotent: each call is a distinct physical donation event.
- Concurrent donations against the same batch serialize on the row lock;
  the second caller validates against the first caller's committed decrement.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.utils import timezone

from inventory.models import Batch, DonationRecord
from inventory.services.exceptions import (
    BatchNotFound,
    InsufficientQuantity,
    InvalidQuantity,
    RecipientNotFound,
)
from inventory.services.transactions import run_disposition
from inventory.services.validation import to_int
from recipients.lookups import recipient_exists

logger = logging.getLogger(__name__)


DONATION_SUCCESS_MESSAGE = "Donation Processed Successfully"


@dataclass(frozen=True)
class DonationResult:
    batch: Batch
    donation: DonationRecord
    quantity_donated: int
    quantity_remaining: int
    status: str
    message: str = DONATION_SUCCESS_MESSAGE


def _require_positive_quantity(value) -> int:
    qty = to_int(value, field_name="quantity", error_cls=InvalidQuantity)
    if qty <= 0:
        raise InvalidQuantity("quantity must be greater than zero")
    return qty


def _require_batch_id(value) -> int:
    try:
        return to_int(value, field_name="batch_id")
    except ValueError as exc:
        raise BatchNotFound(value) from exc


def _donate_locked(*, batch_id: int, recipient_id, quantity: int, user, donated_at) -> DonationResult:
    # recipient row stays locked until commit; lock order is recipient, then batch
    if not recipient_exists(recipient_id, for_update=True):
        raise RecipientNotFound(recipient_id)

    # lock row for concurrency safety
    batch = Batch.objects.select_for_update().filter(pk=batch_id).first()
    if batch is None:
        raise BatchNotFound(batch_id)

    # Terminal batches have nothing left to give.
    available = int(batch.quantity or 0) if batch.is_available else 0
    if available < quantity:
        raise InsufficientQuantity(
            requested=quantity,
            available=available,
            batch_id=batch.pk,
        )

    donation = DonationRecord.objects.create(
        batch=batch,
        recipient_id=int(recipient_id),
        quantity=quantity,
        donated_at=donated_at or timezone.now(),
        performed_by=user,
    )

    batch.quantity = available - quantity
    if batch.quantity == 0:
        batch.status = Batch.Status.DONATED
    batch.save(update_fields=["quantity", "status", "updated_at"])

    return DonationResult(
        batch=batch,
        donation=donation,
        quantity_donated=quantity,
        quantity_remaining=batch.quantity,
        status=batch.status,
    )


def donate(*, batch_id, recipient_id, quantity, user=None, donated_at=None) -> DonationResult:
    """
    Donate `quantity` units of a batch to a recipient.

    Raises:
    - InvalidQuantity      quantity is not an integer > 0
    - RecipientNotFound    recipient unknown or inactive
    - BatchNotFound        batch does not exist
    - InsufficientQuantity batch holds less than requested (nothing changes)
    - TransactionConflict  lock contention outlasted the retry budget
    - StorageFailure       database unavailable
    """
    qty = _require_positive_quantity(quantity)
    pk = _require_batch_id(batch_id)

    try:
        result = run_disposition(
            "donate",
            lambda: _donate_locked(
                batch_id=pk,
                recipient_id=recipient_id,
                quantity=qty,
                user=user,
                donated_at=donated_at,
            ),
            batch_id=pk,
            recipient_id=recipient_id,
        )
    except RecipientNotFound:
        logger.warning(
            "Donation rejected: unknown recipient",
            extra={"batch_id": pk, "recipient_id": recipient_id},
        )
        raise
    except InsufficientQuantity as exc:
        logger.info(
            "Donation rejected: insufficient quantity",
            extra={"batch_id": pk, "requested": exc.requested, "available": exc.available},
        )
        raise

    logger.info(
        "Donation processed",
        extra={
            "batch_id": pk,
            "recipient_id": result.donation.recipient_id,
            "donation_id": result.donation.pk,
            "quantity": qty,
            "remaining": result.quantity_remaining,
            "status": result.status,
        },
    )
    return result
