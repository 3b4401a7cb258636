# inventory/serializers/batch.py

"""
BATCH SERIALIZER (READ-ONLY)

Batches are created by receiving (outside this service) and mutated only by
disposition actions, so every field here is read-only.
"""

from rest_framework import serializers

from inventory.models import Batch


class BatchSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    category_name = serializers.CharField(source="product.category.name", read_only=True)

    class Meta:
        model = Batch
        fields = [
            "id",
            "product",
            "product_name",
            "category_name",
            "quantity_received",
            "quantity",
            "expiry_date",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
