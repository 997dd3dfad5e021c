"""In-memory trueque repository."""

from typing import Optional

from tide.domain.model.trueque import Trueque
from tide.domain.repository.trueque import TruequeRepository
from tide.domain.value import CommunityId, TruequeId
from tide.persistence.store import EngineStore


class InMemoryTruequeRepository(TruequeRepository):
    """In-memory implementation of TruequeRepository."""

    def __init__(self, store: EngineStore) -> None:
        self._store = store

    async def find_by_id(self, trueque_id: TruequeId) -> Optional[Trueque]:
        """Find a trueque by ID."""
        return self._store.trueques.get(trueque_id)

    async def find_by_community(self, community_id: CommunityId) -> list[Trueque]:
        """Find trueques of a community in creation order."""
        # dict keeps insertion order and updates replace in place
        return [
            t for t in self._store.trueques.values() if t.community_id == community_id
        ]

    async def save(self, trueque: Trueque) -> Trueque:
        """Save or update a trueque."""
        self._store.trueques[trueque.id] = trueque
        return trueque
