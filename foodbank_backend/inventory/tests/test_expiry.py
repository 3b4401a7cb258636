# inventory/tests/test_expiry.py

from datetime import timedelta

from django.test import TestCase

from inventory.models import WASTE_REASON_EXPIRED, Batch, DonationRecord, WasteRecord
from inventory.services.donations import donate
from inventory.services.exceptions import InvalidReferenceDate
from inventory.services.expiry import SWEEP_SUCCESS_MESSAGE, preview_expired, sweep_expired
from inventory.tests.factories import TODAY, make_batch, make_product, make_recipient


class ExpirySweepTests(TestCase):
    def setUp(self):
        self.fresh = make_batch(
            product=make_product(name="Whole Milk"),
            quantity=50,
            expiry_date=TODAY + timedelta(days=5),
        )
        self.bread = make_batch(
            product=make_product(name="Sourdough Bread", category_name="Bakery"),
            quantity=20,
            expiry_date=TODAY - timedelta(days=2),
        )
        self.chicken = make_batch(
            product=make_product(name="Chicken Breast", category_name="Meat"),
            quantity=10,
            expiry_date=TODAY - timedelta(days=10),
        )

    def test_expired_batches_move_to_waste_log(self):
        summary = sweep_expired(reference_date=TODAY)

        self.assertEqual(summary.batches_wasted, 2)
        self.assertEqual(summary.quantity_wasted, 30)
        self.assertEqual(summary.batch_ids, [self.bread.id, self.chicken.id])
        self.assertEqual(summary.message, SWEEP_SUCCESS_MESSAGE)

        for batch, qty in ((self.bread, 20), (self.chicken, 10)):
            batch.refresh_from_db()
            self.assertEqual(batch.status, Batch.Status.WASTED)
            self.assertEqual(batch.quantity, 0)

            record = WasteRecord.objects.get(batch=batch)
            self.assertEqual(record.quantity, qty)
            self.assertEqual(record.reason, WASTE_REASON_EXPIRED)

        self.fresh.refresh_from_db()
        self.assertEqual(self.fresh.status, Batch.Status.AVAILABLE)
        self.assertEqual(self.fresh.quantity, 50)
        self.assertFalse(WasteRecord.objects.filter(batch=self.fresh).exists())

    def test_second_sweep_is_a_no_op(self):
        sweep_expired(reference_date=TODAY)
        summary = sweep_expired(reference_date=TODAY)

        self.assertEqual(summary.batches_wasted, 0)
        self.assertEqual(summary.quantity_wasted, 0)
        self.assertEqual(summary.batch_ids, [])
        self.assertEqual(WasteRecord.objects.count(), 2)

    def test_batch_expiring_on_reference_date_is_kept(self):
        today_batch = make_batch(quantity=5, expiry_date=TODAY)

        sweep_expired(reference_date=TODAY)

        today_batch.refresh_from_db()
        self.assertEqual(today_batch.status, Batch.Status.AVAILABLE)
        self.assertEqual(today_batch.quantity, 5)

    def test_partially_donated_batch_wastes_only_the_remainder(self):
        recipient = make_recipient()
        donate(batch_id=self.bread.id, recipient_id=recipient.id, quantity=8)

        sweep_expired(reference_date=TODAY)

        self.bread.refresh_from_db()
        self.assertEqual(self.bread.status, Batch.Status.WASTED)
        self.assertEqual(WasteRecord.objects.get(batch=self.bread).quantity, 12)

        donated = DonationRecord.objects.get(batch=self.bread).quantity
        wasted = WasteRecord.objects.get(batch=self.bread).quantity
        self.assertEqual(donated + wasted, self.bread.quantity_received)

    def test_donated_batch_is_never_wasted(self):
        recipient = make_recipient()
        donate(batch_id=self.chicken.id, recipient_id=recipient.id, quantity=10)

        summary = sweep_expired(reference_date=TODAY)

        self.assertEqual(summary.batch_ids, [self.bread.id])
        self.chicken.refresh_from_db()
        self.assertEqual(self.chicken.status, Batch.Status.DONATED)
        self.assertFalse(WasteRecord.objects.filter(batch=self.chicken).exists())

    def test_empty_sweep_succeeds(self):
        summary = sweep_expired(reference_date=TODAY - timedelta(days=30))

        self.assertEqual(summary.batches_wasted, 0)
        self.assertEqual(summary.message, SWEEP_SUCCESS_MESSAGE)
        self.assertFalse(WasteRecord.objects.exists())

    def test_reference_date_accepts_iso_string(self):
        summary = sweep_expired(reference_date=TODAY.isoformat())

        self.assertEqual(summary.reference_date, TODAY)
        self.assertEqual(summary.batches_wasted, 2)

    def test_malformed_reference_date_is_rejected(self):
        for bad in ("2025-13-40", "15/01/2025", None):
            with self.subTest(reference_date=bad):
                with self.assertRaises(InvalidReferenceDate):
                    sweep_expired(reference_date=bad)

        self.assertFalse(WasteRecord.objects.exists())

    def test_blank_reason_falls_back_to_expired(self):
        sweep_expired(reference_date=TODAY, reason="  ")

        reasons = set(WasteRecord.objects.values_list("reason", flat=True))
        self.assertEqual(reasons, {WASTE_REASON_EXPIRED})


class ExpiryPreviewTests(TestCase):
    def test_preview_reports_without_writing(self):
        expired = make_batch(quantity=20, expiry_date=TODAY - timedelta(days=1))
        make_batch(quantity=30, expiry_date=TODAY + timedelta(days=1))

        summary = preview_expired(reference_date=TODAY)

        self.assertTrue(summary.dry_run)
        self.assertEqual(summary.batch_ids, [expired.id])
        self.assertEqual(summary.quantity_wasted, 20)
        self.assertIn("Dry run", summary.message)

        expired.refresh_from_db()
        self.assertEqual(expired.status, Batch.Status.AVAILABLE)
        self.assertFalse(WasteRecord.objects.exists())
