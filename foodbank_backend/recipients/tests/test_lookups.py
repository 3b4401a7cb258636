# recipients/tests/test_lookups.py

from django.db import transaction
from django.test import TestCase

from recipients.lookups import recipient_exists
from recipients.models import Recipient


class RecipientLookupTests(TestCase):
    def setUp(self):
        self.recipient = Recipient.objects.create(
            org_name="Edhi Foundation",
            address="Karachi",
        )

    def test_active_recipient_exists(self):
        self.assertTrue(recipient_exists(self.recipient.id))
        self.assertTrue(recipient_exists(str(self.recipient.id)))

    def test_unknown_recipient_does_not_exist(self):
        self.assertFalse(recipient_exists(self.recipient.id + 100))

    def test_inactive_recipient_is_rejected(self):
        self.recipient.is_active = False
        self.recipient.save(update_fields=["is_active"])

        self.assertFalse(recipient_exists(self.recipient.id))

    def test_garbage_ids_are_rejected(self):
        self.assertFalse(recipient_exists(None))
        self.assertFalse(recipient_exists(""))
        self.assertFalse(recipient_exists("abc"))

    def test_locked_lookup_inside_transaction(self):
        with transaction.atomic():
            self.assertTrue(recipient_exists(self.recipient.id, for_update=True))
            self.assertFalse(recipient_exists(self.recipient.id + 100, for_update=True))
