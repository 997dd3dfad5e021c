"""In-memory community repository."""

from typing import Optional

from tide.domain.model.community import Community
from tide.domain.repository.community import CommunityRepository
from tide.domain.value import CommunityId
from tide.persistence.store import EngineStore


class InMemoryCommunityRepository(CommunityRepository):
    """In-memory implementation of CommunityRepository."""

    def __init__(self, store: EngineStore) -> None:
        self._store = store

    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a community by ID."""
        return self._store.communities.get(community_id)

    async def find_all(self) -> list[Community]:
        """List communities in insertion order."""
        return list(self._store.communities.values())

    async def save(self, community: Community) -> Community:
        """Save or update a community."""
        self._store.communities[community.id] = community
        return community
