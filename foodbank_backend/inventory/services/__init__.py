from .candidates import CandidateView, list_donation_candidates
from .donations import DonationResult, donate
from .expiry import SweepSummary, preview_expired, sweep_expired

__all__ = [
    "donate",
    "DonationResult",
    "sweep_expired",
    "preview_expired",
    "SweepSummary",
    "list_donation_candidates",
    "CandidateView",
]
