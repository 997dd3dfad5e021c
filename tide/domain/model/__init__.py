"""Domain model entities for Trueque Tide."""

from tide.domain.model.community import Community
from tide.domain.model.ledger import LedgerEntry, LedgerView
from tide.domain.model.trueque import (
    Accepted,
    Active,
    Countered,
    Rejected,
    Trueque,
    TruequeState,
)
from tide.domain.model.trust import TrustScore
from tide.domain.model.user import User

__all__ = [
    "Community",
    "User",
    "Trueque",
    "TruequeState",
    "Active",
    "Countered",
    "Accepted",
    "Rejected",
    "LedgerEntry",
    "LedgerView",
    "TrustScore",
]
