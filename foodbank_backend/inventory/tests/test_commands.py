# inventory/tests/test_commands.py

from datetime import timedelta
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from catalog.models import Product
from inventory.models import Batch, DonationRecord, WasteRecord
from inventory.tests.factories import TODAY, make_batch, make_recipient
from recipients.models import Recipient


def run(*args, **kwargs):
    out = StringIO()
    call_command(*args, stdout=out, **kwargs)
    return out.getvalue()


class SweepCommandTests(TestCase):
    def setUp(self):
        self.expired = make_batch(quantity=20, expiry_date=TODAY - timedelta(days=2))
        self.fresh = make_batch(quantity=50, expiry_date=TODAY + timedelta(days=5))

    def test_sweep(self):
        output = run("sweep_expired", "--date", TODAY.isoformat())

        self.assertIn(f"Reference date: {TODAY.isoformat()}", output)
        self.assertIn("Batches: 1", output)
        self.assertIn("Quantity: 20", output)
        self.assertIn("Expired items flushed to Waste Log", output)

        self.expired.refresh_from_db()
        self.assertEqual(self.expired.status, Batch.Status.WASTED)

    def test_dry_run_writes_nothing(self):
        output = run("sweep_expired", "--date", TODAY.isoformat(), "--dry-run")

        self.assertIn("Dry run", output)
        self.assertFalse(WasteRecord.objects.exists())

    def test_invalid_date(self):
        with self.assertRaises(CommandError):
            run("sweep_expired", "--date", "yesterday")


class DonateCommandTests(TestCase):
    def setUp(self):
        self.recipient = make_recipient()
        self.batch = make_batch(quantity=10)

    def test_donate(self):
        output = run("donate", str(self.batch.id), str(self.recipient.id), "4")

        self.assertIn("Donation Processed Successfully", output)
        self.assertIn("remaining 6", output)
        self.assertIn("(Whole Milk, Dairy)", output)
        self.assertEqual(DonationRecord.objects.get().quantity, 4)

    def test_insufficient_quantity(self):
        with self.assertRaisesMessage(CommandError, "Insufficient Quantity (requested=50, available=10)"):
            run("donate", str(self.batch.id), str(self.recipient.id), "50")

        self.assertFalse(DonationRecord.objects.exists())

    def test_unknown_recipient(self):
        with self.assertRaisesMessage(CommandError, "recipient_not_found"):
            run("donate", str(self.batch.id), str(self.recipient.id + 99), "1")


class CandidatesCommandTests(TestCase):
    def test_lists_candidates(self):
        batch = make_batch(quantity=12, expiry_date=TODAY + timedelta(days=3))

        output = run("list_donation_candidates", "--days", "7", "--date", TODAY.isoformat())

        self.assertIn(f"#{batch.id}", output)
        self.assertIn("days_left=3", output)
        self.assertIn("1 candidate batch(es).", output)

    def test_no_candidates(self):
        output = run("list_donation_candidates", "--date", TODAY.isoformat())

        self.assertIn("No candidates.", output)

    def test_negative_horizon(self):
        with self.assertRaises(CommandError):
            run("list_donation_candidates", "--days", "-1", "--date", TODAY.isoformat())


class SeedCommandTests(TestCase):
    def test_seed_is_repeatable(self):
        run("seed_disposition_demo")
        run("seed_disposition_demo")

        self.assertEqual(Product.objects.count(), 4)
        self.assertEqual(Batch.objects.count(), 4)
        self.assertEqual(Recipient.objects.count(), 2)
