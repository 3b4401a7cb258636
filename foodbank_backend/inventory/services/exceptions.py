# inventory/services/exceptions.py

"""
DISPOSITION SERVICE ERRORS

Centralized domain errors for donation / expiry services.

Every error carries a stable `code` so API and CLI layers can report it
without string matching.
"""


class DispositionError(Exception):
    """Base exception for all disposition service failures."""

    code = "disposition_error"


class BatchNotFound(DispositionError):
    code = "batch_not_found"

    def __init__(self, batch_id):
        self.batch_id = batch_id
        super().__init__(f"Batch {batch_id} not found")


class RecipientNotFound(DispositionError):
    code = "recipient_not_found"

    def __init__(self, recipient_id):
        self.recipient_id = recipient_id
        super().__init__(f"Recipient {recipient_id} not found")


class InvalidQuantity(DispositionError):
    """Raised when a requested quantity is not a positive integer."""

    code = "invalid_quantity"


class InvalidHorizon(DispositionError):
    """Raised when a candidate horizon is not a non-negative integer."""

    code = "invalid_horizon"


class InvalidReferenceDate(DispositionError):
    """Raised when a reference date is not a date or YYYY-MM-DD string."""

    code = "invalid_date"


class InsufficientQuantity(DispositionError):
    code = "insufficient_quantity"

    def __init__(self, *, requested: int, available: int, batch_id=None):
        self.requested = requested
        self.available = available
        self.batch_id = batch_id
        super().__init__(
            f"Insufficient quantity. Requested: {requested}, Available: {available}"
        )


class TransactionConflict(DispositionError):
    """Lock / isolation failure. Safe to retry."""

    code = "transaction_conflict"


class StorageFailure(DispositionError):
    """Underlying persistence unavailable. Not retried."""

    code = "storage_failure"
