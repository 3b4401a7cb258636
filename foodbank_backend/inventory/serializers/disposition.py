# inventory/serializers/disposition.py

from rest_framework import serializers

from inventory.models import DonationRecord, WasteRecord


class DonationRecordSerializer(serializers.ModelSerializer):
    recipient_name = serializers.CharField(source="recipient.org_name", read_only=True)

    class Meta:
        model = DonationRecord
        fields = [
            "id",
            "batch",
            "recipient",
            "recipient_name",
            "quantity",
            "donated_at",
            "performed_by",
        ]
        read_only_fields = fields


class WasteRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = WasteRecord
        fields = [
            "id",
            "batch",
            "quantity",
            "reason",
            "logged_at",
            "performed_by",
        ]
        read_only_fields = fields


class DonateRequestSerializer(serializers.Serializer):
    # Range checks live in the donation service so every entry point
    # reports the same InvalidQuantity error.
    recipient_id = serializers.IntegerField()
    quantity = serializers.IntegerField()


class SweepRequestSerializer(serializers.Serializer):
    reference_date = serializers.DateField(required=False, allow_null=True)


class CandidateSerializer(serializers.Serializer):
    batch_id = serializers.IntegerField()
    product_id = serializers.IntegerField()
    product_name = serializers.CharField()
    category_name = serializers.CharField()
    quantity = serializers.IntegerField()
    expiry_date = serializers.DateField()
    days_left = serializers.IntegerField()
