# inventory/views/__init__.py

from .disposition import (
    BatchViewSet,
    DonationCandidatesView,
    DonationRecordViewSet,
    SweepExpiredView,
    WasteRecordViewSet,
)

__all__ = [
    "BatchViewSet",
    "DonationCandidatesView",
    "DonationRecordViewSet",
    "SweepExpiredView",
    "WasteRecordViewSet",
]
