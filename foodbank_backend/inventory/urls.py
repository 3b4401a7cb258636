# inventory/urls.py

"""
INVENTORY URLS

Registered under /api/inventory/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from inventory.views import (
    BatchViewSet,
    DonationCandidatesView,
    DonationRecordViewSet,
    SweepExpiredView,
    WasteRecordViewSet,
)

router = DefaultRouter()

router.register(r"batches", BatchViewSet, basename="batches")
router.register(r"donations", DonationRecordViewSet, basename="donations")
router.register(r"waste", WasteRecordViewSet, basename="waste")

urlpatterns = [
    path("sweep-expired/", SweepExpiredView.as_view(), name="sweep-expired"),
    path("candidates/", DonationCandidatesView.as_view(), name="donation-candidates"),
    path("", include(router.urls)),
]
