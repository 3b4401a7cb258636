# inventory/services/candidates.py

"""
DONATION CANDIDATES (READ-ONLY)

Available batches expiring within a horizon:
    reference_date <= expiry_date <= reference_date + horizon_days

Results are ordered by expiry_date (most urgent first), then id.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from django.conf import settings

from inventory.models import Batch
from inventory.services.exceptions import InvalidHorizon
from inventory.services.validation import to_int, to_reference_date


@dataclass(frozen=True)
class CandidateView:
    batch_id: int
    product_id: int
    product_name: str
    category_name: str
    quantity: int
    expiry_date: date
    days_left: int


def default_horizon_days() -> int:
    return int(getattr(settings, "INVENTORY_CANDIDATE_HORIZON_DAYS", 7))


def _require_horizon(value) -> int:
    days = to_int(value, field_name="horizon_days", error_cls=InvalidHorizon)
    if days < 0:
        raise InvalidHorizon("horizon_days must be a non-negative integer")
    return days


def list_donation_candidates(*, horizon_days, reference_date) -> list[CandidateView]:
    days = _require_horizon(horizon_days)
    ref = to_reference_date(reference_date)
    cutoff = ref + timedelta(days=days)

    qs = (
        Batch.objects.select_related("product", "product__category")
        .filter(
            status=Batch.Status.AVAILABLE,
            expiry_date__gte=ref,
            expiry_date__lte=cutoff,
        )
        .order_by("expiry_date", "id")
    )

    return [
        CandidateView(
            batch_id=b.pk,
            product_id=b.product_id,
            product_name=b.product.name,
            category_name=b.product.category.name,
            quantity=int(b.quantity or 0),
            expiry_date=b.expiry_date,
            days_left=b.days_left(ref),
        )
        for b in qs
    ]
