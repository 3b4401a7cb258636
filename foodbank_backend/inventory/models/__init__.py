# inventory/models/__init__.py

from .batch import Batch
from .disposition import WASTE_REASON_EXPIRED, DonationRecord, WasteRecord

__all__ = [
    "Batch",
    "DonationRecord",
    "WasteRecord",
    "WASTE_REASON_EXPIRED",
]
