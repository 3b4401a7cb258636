# inventory/services/validation.py

from __future__ import annotations

from datetime import date, datetime

from inventory.services.exceptions import InvalidReferenceDate


def to_int(value, *, field_name="value", error_cls=ValueError) -> int:
    """
    Integer normalizer.
    HARD RULE: quantities are integer units in this system.
    """
    if value is None or value == "":
        raise error_cls(f"{field_name} is required")

    if isinstance(value, bool):
        # bool is an int subclass in Python
        raise error_cls(f"{field_name} must be an integer")

    if isinstance(value, float) and not value.is_integer():
        raise error_cls(f"{field_name} must be an integer")

    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise error_cls(f"{field_name} must be an integer") from exc


def to_reference_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError as exc:
            raise InvalidReferenceDate("reference_date must be YYYY-MM-DD") from exc
    raise InvalidReferenceDate("reference_date must be a date or YYYY-MM-DD string")
