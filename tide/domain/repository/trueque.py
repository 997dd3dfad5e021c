"""Trueque repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from tide.domain.model.trueque import Trueque
from tide.domain.value import CommunityId, TruequeId


class TruequeRepository(ABC):
    """Repository for Trueque aggregate."""

    @abstractmethod
    async def find_by_id(self, trueque_id: TruequeId) -> Optional[Trueque]:
        """Find a trueque by ID.

        Args:
            trueque_id: The trueque's unique identifier

        Returns:
            The trueque if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_community(self, community_id: CommunityId) -> list[Trueque]:
        """Find all trueques offered in a community.

        Args:
            community_id: Community ID

        Returns:
            Trueques in creation order
        """
        pass

    @abstractmethod
    async def save(self, trueque: Trueque) -> Trueque:
        """Save a trueque (create or update).

        Args:
            trueque: The trueque to save

        Returns:
            The saved trueque
        """
        pass
