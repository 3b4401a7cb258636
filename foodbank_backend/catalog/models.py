# catalog/models.py

"""
PRODUCT CATALOG

Categories and products referenced by inventory batches.

RULES:
- The catalog is maintained outside the disposition core.
- Inventory code only READS it (see catalog.lookups).
"""

from django.db import models


class Category(models.Model):
    class StorageType(models.TextChoices):
        FROZEN = "FROZEN", "Frozen"
        REFRIGERATED = "REFRIGERATED", "Refrigerated"
        DRY = "DRY", "Dry"

    name = models.CharField(max_length=50, unique=True)
    storage_type = models.CharField(max_length=12, choices=StorageType.choices)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name


class Product(models.Model):
    name = models.CharField(max_length=100)
    sku = models.CharField(max_length=50, unique=True)

    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="products",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["name"], name="catalog_product_name_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.sku})"
