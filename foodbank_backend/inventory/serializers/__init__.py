# inventory/serializers/__init__.py

from .batch import BatchSerializer
from .disposition import (
    CandidateSerializer,
    DonateRequestSerializer,
    DonationRecordSerializer,
    SweepRequestSerializer,
    WasteRecordSerializer,
)

__all__ = [
    "BatchSerializer",
    "CandidateSerializer",
    "DonateRequestSerializer",
    "DonationRecordSerializer",
    "SweepRequestSerializer",
    "WasteRecordSerializer",
]
