"""Strongly typed identifiers for Trueque Tide domain entities.

Community and user identifiers come from the seed catalog and are plain
strings; offers and ledger entries are allocated by the engine as UUIDs.
"""

from typing import NewType
from uuid import UUID

# Catalog identifiers (assigned by the seed provider)
CommunityId = NewType("CommunityId", str)
UserId = NewType("UserId", str)

# Engine-allocated identifiers
TruequeId = NewType("TruequeId", UUID)
LedgerEntryId = NewType("LedgerEntryId", UUID)
