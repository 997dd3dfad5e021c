"""In-memory ledger repository."""

from typing import Optional

from tide.domain.model.ledger import LedgerEntry, LedgerView
from tide.domain.model.user import User
from tide.domain.repository.ledger import LedgerRepository
from tide.domain.value import CommunityId
from tide.persistence.store import EngineStore


class InMemoryLedgerRepository(LedgerRepository):
    """In-memory implementation of LedgerRepository."""

    def __init__(self, store: EngineStore) -> None:
        self._store = store

    async def append(
        self, entry: LedgerEntry, debited: User, credited: User
    ) -> LedgerEntry:
        """Append an entry together with the updated balances."""
        return self._store.record_transfer(entry, debited, credited)

    async def last_sequence(self) -> int:
        """Return the latest sequence number."""
        return self._store.last_sequence

    async def view(self, community_id: Optional[CommunityId] = None) -> LedgerView:
        """Return a view over the ledger as it is now."""
        return LedgerView(self._store.ledger, community_id=community_id)

    async def total_exchanges(self) -> int:
        """Number of settled entries."""
        return self._store.total_exchanges

    async def total_circulated(self) -> int:
        """Sum of settled tokens."""
        return self._store.total_circulated

    async def count_by_community(self, community_id: CommunityId) -> int:
        """Number of settled entries within a community."""
        return self._store.exchanges_by_community.get(community_id, 0)

    async def circulated_by_community(self, community_id: CommunityId) -> int:
        """Sum of settled tokens within a community."""
        return self._store.circulated_by_community.get(community_id, 0)
