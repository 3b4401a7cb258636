"""
======================================================
PATH: inventory/views/disposition.py
======================================================
DISPOSITION ENDPOINTS

Purpose:
- Expose the disposition core to operator tools and schedulers:
    POST /api/inventory/batches/{id}/donate/
    POST /api/inventory/sweep-expired/
    GET  /api/inventory/candidates/?days=7
- Read-only listings of batches and both disposition logs.

RULES:
- Views never touch quantities; every mutation goes through services.
- Every command returns {"status": "ok" | "error", ...}.
"""

from __future__ import annotations

from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from inventory.models import Batch, DonationRecord, WasteRecord
from inventory.serializers import (
    BatchSerializer,
    CandidateSerializer,
    DonateRequestSerializer,
    DonationRecordSerializer,
    SweepRequestSerializer,
    WasteRecordSerializer,
)
from inventory.services.candidates import default_horizon_days, list_donation_candidates
from inventory.services.donations import donate as donate_from_batch
from inventory.services.exceptions import (
    BatchNotFound,
    DispositionError,
    InsufficientQuantity,
    InvalidHorizon,
    InvalidQuantity,
    InvalidReferenceDate,
    RecipientNotFound,
    StorageFailure,
    TransactionConflict,
)
from inventory.services.expiry import sweep_expired
from inventory.services.validation import to_reference_date


ERROR_STATUS = {
    BatchNotFound: status.HTTP_404_NOT_FOUND,
    RecipientNotFound: status.HTTP_404_NOT_FOUND,
    InvalidQuantity: status.HTTP_400_BAD_REQUEST,
    InvalidHorizon: status.HTTP_400_BAD_REQUEST,
    InvalidReferenceDate: status.HTTP_400_BAD_REQUEST,
    InsufficientQuantity: status.HTTP_409_CONFLICT,
    TransactionConflict: status.HTTP_409_CONFLICT,
    StorageFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(exc: DispositionError) -> Response:
    payload = {"status": "error", "code": exc.code, "detail": str(exc)}
    if isinstance(exc, InsufficientQuantity):
        payload["requested"] = exc.requested
        payload["available"] = exc.available

    return Response(
        payload,
        status=ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST),
    )


def _reference_date_param(raw):
    raw = (raw or "").strip()
    if not raw:
        return timezone.localdate()
    return to_reference_date(raw)


class BatchViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Batch endpoints.

    - list / retrieve are read-only
    - donate is the ONLY way to move quantity out of a batch via the API
    """

    serializer_class = BatchSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["status", "product"]

    def get_queryset(self):
        return Batch.objects.select_related("product", "product__category").order_by(
            "expiry_date", "id"
        )

    @extend_schema(request=DonateRequestSerializer)
    @action(detail=True, methods=["post"], url_path="donate")
    def donate(self, request, pk=None):
        serializer = DonateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        v = serializer.validated_data

        try:
            result = donate_from_batch(
                batch_id=pk,
                recipient_id=v["recipient_id"],
                quantity=v["quantity"],
                user=request.user,
            )
        except DispositionError as exc:
            return error_response(exc)

        return Response(
            {
                "status": "ok",
                "message": result.message,
                "donation_id": result.donation.pk,
                "quantity_donated": result.quantity_donated,
                "batch": self.get_serializer(result.batch).data,
            },
            status=status.HTTP_201_CREATED,
        )


class SweepExpiredView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=SweepRequestSerializer)
    def post(self, request):
        serializer = SweepRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reference_date = serializer.validated_data.get("reference_date") or timezone.localdate()

        try:
            summary = sweep_expired(reference_date=reference_date, user=request.user)
        except DispositionError as exc:
            return error_response(exc)

        return Response(
            {
                "status": "ok",
                "message": summary.message,
                "reference_date": summary.reference_date,
                "batches_wasted": summary.batches_wasted,
                "quantity_wasted": summary.quantity_wasted,
                "batch_ids": summary.batch_ids,
            },
            status=status.HTTP_200_OK,
        )


class DonationCandidatesView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        parameters=[
            OpenApiParameter("days", int, description="Horizon in days (default 7)"),
            OpenApiParameter("reference_date", str, description="YYYY-MM-DD (default today)"),
        ],
        responses=CandidateSerializer(many=True),
    )
    def get(self, request):
        raw_days = (request.query_params.get("days") or "").strip()
        days = raw_days if raw_days else default_horizon_days()

        try:
            reference_date = _reference_date_param(request.query_params.get("reference_date"))
            candidates = list_donation_candidates(horizon_days=days, reference_date=reference_date)
        except DispositionError as exc:
            return error_response(exc)

        data = CandidateSerializer(candidates, many=True).data
        return Response({"count": len(data), "results": data})


class DonationRecordViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = DonationRecordSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["batch", "recipient"]

    def get_queryset(self):
        return DonationRecord.objects.select_related("recipient").order_by("-donated_at", "-id")


class WasteRecordViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = WasteRecordSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["batch", "reason"]

    def get_queryset(self):
        return WasteRecord.objects.order_by("-logged_at", "-id")
