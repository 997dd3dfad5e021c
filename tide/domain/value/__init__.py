"""Domain value objects for Trueque Tide."""

from tide.domain.value.identifiers import (
    CommunityId,
    LedgerEntryId,
    TruequeId,
    UserId,
)
from tide.domain.value.seed import SeedCommunity, SeedDocument, SeedUser
from tide.domain.value.types import ErrorKind, OfferAction, Selection, TruequeStatus

__all__ = [
    # Identifiers
    "CommunityId",
    "UserId",
    "TruequeId",
    "LedgerEntryId",
    # Types
    "ErrorKind",
    "OfferAction",
    "Selection",
    "TruequeStatus",
    # Seed catalog
    "SeedCommunity",
    "SeedDocument",
    "SeedUser",
]
