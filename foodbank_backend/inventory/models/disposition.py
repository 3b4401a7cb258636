# inventory/models/disposition.py

"""
DISPOSITION LOGS

Two append-only logs sharing a batch reference:
- DonationRecord: quantity handed to a recipient
- WasteRecord: quantity written off (expired)

GUARANTEES:
- Created ONCE, never edited, never deleted
- Batch reference is PROTECTed (a log row never points at a missing batch)
"""

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone

from recipients.models import Recipient

from .batch import Batch


WASTE_REASON_EXPIRED = "expired"


class _AppendOnlyRecord(models.Model):
    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError(f"{type(self).__name__} records are immutable")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError(
            f"{type(self).__name__} records are immutable and cannot be deleted"
        )


class DonationRecord(_AppendOnlyRecord):
    batch = models.ForeignKey(
        Batch, on_delete=models.PROTECT, related_name="donations"
    )
    recipient = models.ForeignKey(
        Recipient, on_delete=models.PROTECT, related_name="donations"
    )

    quantity = models.PositiveIntegerField()

    donated_at = models.DateTimeField(default=timezone.now)

    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="donation_records",
    )

    class Meta:
        ordering = ["donated_at", "id"]
        indexes = [
            models.Index(fields=["batch", "donated_at"], name="inv_donation_batch_idx"),
            models.Index(fields=["recipient", "donated_at"], name="inv_donation_recipient_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gt=0),
                name="chk_donation_qty_gt_zero",
            ),
        ]

    def clean(self):
        if self.quantity is None or self.quantity <= 0:
            raise ValidationError({"quantity": "quantity must be greater than zero"})

    def __str__(self):
        return f"Donation {self.pk} | batch {self.batch_id} -> {self.recipient_id} | {self.quantity}"


class WasteRecord(_AppendOnlyRecord):
    batch = models.ForeignKey(
        Batch, on_delete=models.PROTECT, related_name="waste_records"
    )

    quantity = models.PositiveIntegerField()
    reason = models.CharField(max_length=50, default=WASTE_REASON_EXPIRED)

    logged_at = models.DateTimeField(default=timezone.now)

    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="waste_records",
    )

    class Meta:
        ordering = ["logged_at", "id"]
        indexes = [
            models.Index(fields=["batch", "logged_at"], name="inv_waste_batch_idx"),
            models.Index(fields=["logged_at"], name="inv_waste_logged_at_idx"),
        ]

    def __str__(self):
        return f"Waste {self.pk} | batch {self.batch_id} | {self.quantity} | {self.reason}"
