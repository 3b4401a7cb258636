# inventory/models/batch.py

"""
INVENTORY BATCH (PERISHABLE STOCK)

Represents ONE receipt of a product with its own expiry date.

CANONICAL MODEL:
- quantity_received is immutable after creation (the original quantity)
- quantity is mutated ONLY via disposition services (donate / sweep)
- expiry_date is immutable after creation
- status is monotonic: AVAILABLE -> DONATED | WASTED, never back
- Batches are never deleted (audit safety)
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q

from catalog.models import Product


class Batch(models.Model):
    class Status(models.TextChoices):
        AVAILABLE = "AVAILABLE", "Available"
        DONATED = "DONATED", "Donated"
        WASTED = "WASTED", "Wasted"

    TERMINAL_STATUSES = (Status.DONATED, Status.WASTED)

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="batches",
    )

    quantity_received = models.PositiveIntegerField(
        help_text="Quantity received (immutable)"
    )

    quantity = models.PositiveIntegerField(
        help_text="Remaining quantity (service-managed only)",
    )

    expiry_date = models.DateField()

    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.AVAILABLE,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["expiry_date", "id"]
        verbose_name_plural = "batches"
        indexes = [
            models.Index(fields=["expiry_date"], name="inv_batch_expiry_idx"),
            models.Index(fields=["status"], name="inv_batch_status_idx"),
            models.Index(fields=["status", "expiry_date"], name="inv_batch_status_expiry_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity_received__gt=0),
                name="chk_batch_qty_received_gt_zero",
            ),
            models.CheckConstraint(
                condition=Q(quantity__gte=0),
                name="chk_batch_qty_gte_zero",
            ),
            models.CheckConstraint(
                condition=Q(quantity__lte=F("quantity_received")),
                name="chk_batch_qty_lte_received",
            ),
            models.CheckConstraint(
                condition=Q(status="AVAILABLE") | Q(quantity=0),
                name="chk_batch_terminal_qty_zero",
            ),
        ]

    # -------------------------------------------------
    # VALIDATION
    # -------------------------------------------------

    def clean(self):
        if self.quantity_received is None or self.quantity_received <= 0:
            raise ValidationError(
                {"quantity_received": "quantity_received must be greater than zero"}
            )

        if self.quantity < 0:
            raise ValidationError({"quantity": "quantity cannot be negative"})

        if self.quantity > self.quantity_received:
            raise ValidationError(
                {"quantity": "quantity cannot exceed quantity_received"}
            )

        if self.status in self.TERMINAL_STATUSES and self.quantity != 0:
            raise ValidationError(
                {"quantity": f"{self.status} batches must have quantity 0"}
            )

    # -------------------------------------------------
    # IMMUTABILITY + MONOTONIC STATUS
    # -------------------------------------------------

    def save(self, *args, **kwargs):
        if self._state.adding:
            if self.quantity is None:
                self.quantity = self.quantity_received
        else:
            original = Batch.objects.only(
                "product_id", "quantity_received", "expiry_date", "status"
            ).get(pk=self.pk)

            if self.quantity_received != original.quantity_received:
                raise ValidationError({"quantity_received": "quantity_received is immutable"})

            if self.expiry_date != original.expiry_date:
                raise ValidationError({"expiry_date": "expiry_date is immutable"})

            if self.product_id != original.product_id:
                raise ValidationError({"product": "product is immutable"})

            if original.status in self.TERMINAL_STATUSES and self.status != original.status:
                raise ValidationError(
                    {"status": f"Batch is {original.status}; status cannot change"}
                )

        self.full_clean()
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Batches are audit artifacts and cannot be deleted.")

    # -------------------------------------------------
    # READ-ONLY HELPERS
    # -------------------------------------------------

    @property
    def is_available(self) -> bool:
        return self.status == self.Status.AVAILABLE

    def is_expired_on(self, reference_date) -> bool:
        return self.expiry_date < reference_date

    def days_left(self, reference_date) -> int:
        return (self.expiry_date - reference_date).days

    def __str__(self):
        product_name = getattr(self.product, "name", "Product")
        return f"Batch {self.pk} | {product_name} | {self.status}"
