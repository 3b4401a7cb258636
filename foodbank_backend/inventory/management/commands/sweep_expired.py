# inventory/management/commands/sweep_expired.py

"""
Scheduler entry point: flush expired available batches to the Waste Log.

    python manage.py sweep_expired
    python manage.py sweep_expired --date 2025-01-31
    python manage.py sweep_expired --dry-run
"""

from __future__ import annotations

from datetime import datetime

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from inventory.services.exceptions import DispositionError
from inventory.services.expiry import preview_expired, sweep_expired


def _parse_date(s: str | None):
    if not s:
        return None
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        return None


class Command(BaseCommand):
    help = "Move every available batch that expired before the reference date to the Waste Log."

    def add_arguments(self, parser):
        parser.add_argument("--date", dest="reference_date", help="Reference date YYYY-MM-DD (default: today)")
        parser.add_argument("--dry-run", action="store_true", help="Show what would be flushed without writing")

    def handle(self, *args, **options):
        raw_date = options.get("reference_date")
        reference_date = _parse_date(raw_date)
        if raw_date and not reference_date:
            raise CommandError("Invalid --date. Use YYYY-MM-DD")
        reference_date = reference_date or timezone.localdate()

        self.stdout.write(self.style.MIGRATE_HEADING("Expiry sweep"))
        self.stdout.write(f"Reference date: {reference_date.isoformat()}")

        if options.get("dry_run"):
            summary = preview_expired(reference_date=reference_date)
        else:
            try:
                summary = sweep_expired(reference_date=reference_date)
            except DispositionError as exc:
                raise CommandError(f"[{exc.code}] {exc}") from exc

        self.stdout.write(f"Batches: {summary.batches_wasted}")
        self.stdout.write(f"Quantity: {summary.quantity_wasted}")
        if summary.batch_ids:
            self.stdout.write(f"Batch ids: {', '.join(str(pk) for pk in summary.batch_ids)}")

        self.stdout.write(self.style.SUCCESS(summary.message))
