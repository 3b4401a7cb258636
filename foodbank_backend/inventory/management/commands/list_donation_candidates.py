# inventory/management/commands/list_donation_candidates.py

from __future__ import annotations

from datetime import datetime

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from inventory.services.candidates import default_horizon_days, list_donation_candidates
from inventory.services.exceptions import DispositionError


class Command(BaseCommand):
    help = "List available batches expiring within the horizon (donation candidates)."

    def add_arguments(self, parser):
        parser.add_argument("--days", type=int, default=None, help="Horizon in days (default: settings)")
        parser.add_argument("--date", dest="reference_date", help="Reference date YYYY-MM-DD (default: today)")

    def handle(self, *args, **options):
        raw_date = options.get("reference_date")
        if raw_date:
            try:
                reference_date = datetime.strptime(raw_date, "%Y-%m-%d").date()
            except ValueError as exc:
                raise CommandError("Invalid --date. Use YYYY-MM-DD") from exc
        else:
            reference_date = timezone.localdate()

        days = options.get("days")
        if days is None:
            days = default_horizon_days()

        try:
            candidates = list_donation_candidates(horizon_days=days, reference_date=reference_date)
        except DispositionError as exc:
            raise CommandError(f"[{exc.code}] {exc}") from exc

        self.stdout.write(
            self.style.MIGRATE_HEADING(
                f"Donation candidates ({reference_date.isoformat()} + {days} days)"
            )
        )

        if not candidates:
            self.stdout.write(self.style.WARNING("No candidates."))
            return

        for c in candidates:
            self.stdout.write(
                f"#{c.batch_id:<6} {c.product_name:<24} {c.category_name:<14} "
                f"qty={c.quantity:<6} expires={c.expiry_date.isoformat()} days_left={c.days_left}"
            )
        self.stdout.write(self.style.SUCCESS(f"{len(candidates)} candidate batch(es)."))
