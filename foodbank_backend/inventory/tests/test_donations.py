# inventory/tests/test_donations.py

from datetime import timedelta

from django.db.models import Sum
from django.test import TestCase

from inventory.models import Batch, DonationRecord, WasteRecord
from inventory.services.donations import DONATION_SUCCESS_MESSAGE, donate
from inventory.services.exceptions import (
    BatchNotFound,
    InsufficientQuantity,
    InvalidQuantity,
    RecipientNotFound,
)
from inventory.services.expiry import sweep_expired
from inventory.tests.factories import TODAY, make_batch, make_recipient


class DonationAllocatorTests(TestCase):
    """
    GUARANTEES:
    - successful donation appends exactly one DonationRecord and decrements once
    - DONATED only when quantity reaches exactly zero
    - failures leave batch and log untouched
    """

    def setUp(self):
        self.recipient = make_recipient()
        self.batch = make_batch(quantity=50, expiry_date=TODAY + timedelta(days=5))

    def _assert_unchanged(self, batch, quantity, status):
        batch.refresh_from_db()
        self.assertEqual(batch.quantity, quantity)
        self.assertEqual(batch.status, status)

    # ======================================================
    # SUCCESS PATHS
    # ======================================================

    def test_partial_donation_keeps_batch_available(self):
        result = donate(batch_id=self.batch.id, recipient_id=self.recipient.id, quantity=10)

        self.assertEqual(result.quantity_donated, 10)
        self.assertEqual(result.quantity_remaining, 40)
        self.assertEqual(result.status, Batch.Status.AVAILABLE)
        self.assertEqual(result.message, DONATION_SUCCESS_MESSAGE)

        self._assert_unchanged(self.batch, 40, Batch.Status.AVAILABLE)

        donations = DonationRecord.objects.filter(batch=self.batch)
        self.assertEqual(donations.count(), 1)
        self.assertEqual(donations.get().quantity, 10)
        self.assertEqual(donations.get().recipient_id, self.recipient.id)

    def test_donating_everything_marks_batch_donated(self):
        donate(batch_id=self.batch.id, recipient_id=self.recipient.id, quantity=20)
        result = donate(batch_id=self.batch.id, recipient_id=self.recipient.id, quantity=30)

        self.assertEqual(result.status, Batch.Status.DONATED)
        self._assert_unchanged(self.batch, 0, Batch.Status.DONATED)

        donated_total = DonationRecord.objects.filter(batch=self.batch).aggregate(
            total=Sum("quantity")
        )["total"]
        self.assertEqual(donated_total, self.batch.quantity_received)

    def test_donation_is_not_idempotent(self):
        donate(batch_id=self.batch.id, recipient_id=self.recipient.id, quantity=5)
        donate(batch_id=self.batch.id, recipient_id=self.recipient.id, quantity=5)

        self._assert_unchanged(self.batch, 40, Batch.Status.AVAILABLE)
        self.assertEqual(DonationRecord.objects.filter(batch=self.batch).count(), 2)

    def test_string_ids_and_quantity_are_accepted(self):
        donate(batch_id=str(self.batch.id), recipient_id=str(self.recipient.id), quantity="7")

        self._assert_unchanged(self.batch, 43, Batch.Status.AVAILABLE)

    def test_performed_by_is_recorded(self):
        from django.contrib.auth import get_user_model

        user = get_user_model().objects.create_user(username="operator", password="pass")
        result = donate(
            batch_id=self.batch.id,
            recipient_id=self.recipient.id,
            quantity=1,
            user=user,
        )
        self.assertEqual(result.donation.performed_by, user)

    # ======================================================
    # FAILURES (NO MUTATION)
    # ======================================================

    def test_insufficient_quantity_changes_nothing(self):
        batch = make_batch(quantity=10)

        with self.assertRaises(InsufficientQuantity) as ctx:
            donate(batch_id=batch.id, recipient_id=self.recipient.id, quantity=50)

        self.assertEqual(ctx.exception.requested, 50)
        self.assertEqual(ctx.exception.available, 10)
        self._assert_unchanged(batch, 10, Batch.Status.AVAILABLE)
        self.assertFalse(DonationRecord.objects.filter(batch=batch).exists())

    def test_invalid_quantities_are_rejected(self):
        for bad in (0, -3, None, "", "abc", "--5", "\u00b2", True, 2.5, [5]):
            with self.subTest(quantity=bad):
                with self.assertRaises(InvalidQuantity):
                    donate(batch_id=self.batch.id, recipient_id=self.recipient.id, quantity=bad)

        self._assert_unchanged(self.batch, 50, Batch.Status.AVAILABLE)
        self.assertFalse(DonationRecord.objects.exists())

    def test_unknown_batch(self):
        with self.assertRaises(BatchNotFound):
            donate(batch_id=self.batch.id + 1000, recipient_id=self.recipient.id, quantity=1)

        with self.assertRaises(BatchNotFound):
            donate(batch_id="not-a-number", recipient_id=self.recipient.id, quantity=1)

    def test_unknown_recipient(self):
        with self.assertRaises(RecipientNotFound):
            donate(batch_id=self.batch.id, recipient_id=self.recipient.id + 1000, quantity=1)

        self._assert_unchanged(self.batch, 50, Batch.Status.AVAILABLE)
        self.assertFalse(DonationRecord.objects.exists())

    def test_inactive_recipient(self):
        self.recipient.is_active = False
        self.recipient.save(update_fields=["is_active"])

        with self.assertRaises(RecipientNotFound):
            donate(batch_id=self.batch.id, recipient_id=self.recipient.id, quantity=1)

    def test_wasted_batch_cannot_be_donated(self):
        expired = make_batch(quantity=20, expiry_date=TODAY - timedelta(days=2))
        sweep_expired(reference_date=TODAY)

        with self.assertRaises(InsufficientQuantity) as ctx:
            donate(batch_id=expired.id, recipient_id=self.recipient.id, quantity=1)

        self.assertEqual(ctx.exception.available, 0)
        self.assertFalse(DonationRecord.objects.filter(batch=expired).exists())
        self.assertEqual(WasteRecord.objects.filter(batch=expired).count(), 1)

    def test_donated_batch_cannot_be_donated_again(self):
        donate(batch_id=self.batch.id, recipient_id=self.recipient.id, quantity=50)

        with self.assertRaises(InsufficientQuantity):
            donate(batch_id=self.batch.id, recipient_id=self.recipient.id, quantity=1)

        self.assertEqual(DonationRecord.objects.filter(batch=self.batch).count(), 1)
