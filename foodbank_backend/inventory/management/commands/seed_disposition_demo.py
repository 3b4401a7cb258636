# inventory/management/commands/seed_disposition_demo.py

from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from catalog.models import Category, Product
from inventory.models import Batch
from recipients.models import Recipient


CATEGORIES = [
    ("Dairy", Category.StorageType.REFRIGERATED),
    ("Bakery", Category.StorageType.DRY),
    ("Canned Goods", Category.StorageType.DRY),
    ("Meat", Category.StorageType.FROZEN),
]

# sku, name, category, quantity, expiry offset in days (negative = already expired)
PRODUCTS = [
    ("MILK01", "Whole Milk", "Dairy", 50, 5),
    ("BRD01", "Sourdough Bread", "Bakery", 20, -2),
    ("CAN01", "Tomato Soup", "Canned Goods", 100, 365),
    ("MEAT01", "Chicken Breast", "Meat", 10, -10),
]

RECIPIENTS = [
    ("Edhi Foundation", "Karachi"),
    ("Chhipa Welfare", "Lahore"),
]


class Command(BaseCommand):
    help = "Seed categories, products, recipients and sample batches (some already expired)"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding disposition demo data..."))

        today = timezone.localdate()

        # -------------------------------
        # CATEGORIES
        # -------------------------------
        category_objs = {}
        for name, storage_type in CATEGORIES:
            obj, _ = Category.objects.get_or_create(
                name=name,
                defaults={"storage_type": storage_type},
            )
            category_objs[name] = obj

        # -------------------------------
        # PRODUCTS + BATCHES
        # -------------------------------
        created_batches = 0
        for sku, name, cat, qty, offset in PRODUCTS:
            product, _ = Product.objects.get_or_create(
                sku=sku,
                defaults={"name": name, "category": category_objs[cat]},
            )

            if product.batches.exists():
                continue

            Batch.objects.create(
                product=product,
                quantity_received=qty,
                quantity=qty,
                expiry_date=today + timedelta(days=offset),
            )
            created_batches += 1

        # -------------------------------
        # RECIPIENTS
        # -------------------------------
        for org_name, address in RECIPIENTS:
            Recipient.objects.get_or_create(
                org_name=org_name,
                defaults={"address": address},
            )

        self.stdout.write(
            self.style.SUCCESS(f"✅ Demo data seeded ({created_batches} new batch(es)).")
        )
