"""Community repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from tide.domain.model.community import Community
from tide.domain.value import CommunityId


class CommunityRepository(ABC):
    """Repository for Community aggregate.

    Defines the contract for community persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a community by ID.

        Args:
            community_id: The community's unique identifier

        Returns:
            The community if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> list[Community]:
        """List every community in catalog order.

        Returns:
            Communities in the order they were saved
        """
        pass

    @abstractmethod
    async def save(self, community: Community) -> Community:
        """Save a community (create or update).

        Args:
            community: The community to save

        Returns:
            The saved community
        """
        pass
