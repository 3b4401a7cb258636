# inventory/admin.py
"""
=====================================================
PATH: inventory/admin.py
=====================================================

Admin rules (audit-safe disposition):

- Batches and both disposition logs are VIEW-ONLY here.
- Quantity/status changes happen only through donate() / sweep_expired().
- Nothing is deletable (the models refuse deletes anyway).
"""

from __future__ import annotations

from datetime import timedelta

from django.conf import settings
from django.contrib import admin
from django.utils import timezone

from inventory.models import Batch, DonationRecord, WasteRecord


class _ReadOnlyAdmin(admin.ModelAdmin):
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Batch)
class BatchAdmin(_ReadOnlyAdmin):
    list_display = (
        "id",
        "product",
        "quantity_received",
        "quantity",
        "expiry_date",
        "expiry_status",
        "status",
        "created_at",
    )
    list_filter = ("status", "expiry_date", "product__category")
    search_fields = ("product__name", "product__sku")
    ordering = ("expiry_date", "id")

    def expiry_status(self, obj):
        today = timezone.localdate()

        if obj.expiry_date < today:
            return "❌ EXPIRED"

        horizon = getattr(settings, "INVENTORY_CANDIDATE_HORIZON_DAYS", 7)
        if obj.expiry_date <= today + timedelta(days=horizon):
            return "⚠ DONATE SOON"

        return "OK"

    expiry_status.short_description = "Expiry Status"


@admin.register(DonationRecord)
class DonationRecordAdmin(_ReadOnlyAdmin):
    list_display = ("id", "batch", "recipient", "quantity", "donated_at", "performed_by")
    list_filter = ("donated_at", "recipient")
    search_fields = ("batch__product__name", "recipient__org_name")


@admin.register(WasteRecord)
class WasteRecordAdmin(_ReadOnlyAdmin):
    list_display = ("id", "batch", "quantity", "reason", "logged_at", "performed_by")
    list_filter = ("reason", "logged_at")
    search_fields = ("batch__product__name",)
