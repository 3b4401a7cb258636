# recipients/lookups.py

from __future__ import annotations

from recipients.models import Recipient


def recipient_exists(recipient_id, *, for_update=False) -> bool:
    """
    Only active recipients can receive donations.

    for_update=True locks the recipient row until the caller's transaction
    ends, so the recipient cannot be deactivated mid-donation.
    """
    if recipient_id in (None, ""):
        return False
    try:
        pk = int(recipient_id)
    except (TypeError, ValueError):
        return False

    qs = Recipient.objects.filter(pk=pk, is_active=True)
    if for_update:
        qs = qs.select_for_update()
    return qs.values_list("pk", flat=True).first() is not None
