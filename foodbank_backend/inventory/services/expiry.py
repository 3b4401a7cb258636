# inventory/services/expiry.py

"""
======================================================
PATH: inventory/services/expiry.py
======================================================
EXPIRY SWEEPER

Purpose:
- Flush every AVAILABLE batch whose expiry_date < reference_date to the
  Waste Log in ONE atomic group operation.

Rules:
- Selection and mutation share one transaction: matching rows are locked
  (ascending id order, deadlock-safe) and re-checked under the lock, so a
  batch donated in the meantime is never wasted.
- Wastage applies to the REMAINING quantity (partially donated batches
  only waste what is left).
- Idempotent: already WASTED / DONATED batches are never selected again.
- An empty sweep is a success, not an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from django.utils import timezone

from inventory.models import WASTE_REASON_EXPIRED, Batch, WasteRecord
from inventory.services.transactions import run_disposition
from inventory.services.validation import to_reference_date

logger = logging.getLogger(__name__)


SWEEP_SUCCESS_MESSAGE = "Expired items flushed to Waste Log"


@dataclass(frozen=True)
class SweepSummary:
    reference_date: date
    batches_wasted: int
    quantity_wasted: int
    batch_ids: list[int] = field(default_factory=list)
    dry_run: bool = False

    @property
    def message(self) -> str:
        if self.dry_run:
            return f"Dry run: {self.batches_wasted} expired batch(es) would be flushed to Waste Log"
        return SWEEP_SUCCESS_MESSAGE


def _expired_available_qs(reference_date: date):
    return Batch.objects.filter(
        status=Batch.Status.AVAILABLE,
        expiry_date__lt=reference_date,
    )


def _sweep_locked(*, reference_date: date, reason: str, user, logged_at) -> SweepSummary:
    locked = list(
        _expired_available_qs(reference_date)
        .select_for_update()
        .order_by("id")
    )

    stamp = logged_at or timezone.now()
    wasted_ids = []
    total_wasted = 0

    for batch in locked:
        # re-check under lock
        if not batch.is_available or not batch.is_expired_on(reference_date):
            continue

        wasted_qty = int(batch.quantity or 0)

        WasteRecord.objects.create(
            batch=batch,
            quantity=wasted_qty,
            reason=reason,
            logged_at=stamp,
            performed_by=user,
        )

        batch.quantity = 0
        batch.status = Batch.Status.WASTED
        batch.save(update_fields=["quantity", "status", "updated_at"])

        wasted_ids.append(batch.pk)
        total_wasted += wasted_qty

    return SweepSummary(
        reference_date=reference_date,
        batches_wasted=len(wasted_ids),
        quantity_wasted=total_wasted,
        batch_ids=wasted_ids,
    )


def sweep_expired(*, reference_date, user=None, reason: str = WASTE_REASON_EXPIRED, logged_at=None) -> SweepSummary:
    """
    Waste all available batches that expired before `reference_date`.
    """
    ref = to_reference_date(reference_date)
    reason = (reason or "").strip() or WASTE_REASON_EXPIRED

    summary = run_disposition(
        "sweep_expired",
        lambda: _sweep_locked(
            reference_date=ref,
            reason=reason,
            user=user,
            logged_at=logged_at,
        ),
        reference_date=str(ref),
    )

    logger.info(
        "Expiry sweep completed",
        extra={
            "reference_date": str(ref),
            "batches_wasted": summary.batches_wasted,
            "quantity_wasted": summary.quantity_wasted,
        },
    )
    return summary


def preview_expired(*, reference_date) -> SweepSummary:
    """
    Read-only preview of what sweep_expired() would flush right now.
    """
    ref = to_reference_date(reference_date)
    rows = list(
        _expired_available_qs(ref)
        .order_by("id")
        .values_list("id", "quantity")
    )
    return SweepSummary(
        reference_date=ref,
        batches_wasted=len(rows),
        quantity_wasted=sum(int(qty or 0) for _, qty in rows),
        batch_ids=[pk for pk, _ in rows],
        dry_run=True,
    )
