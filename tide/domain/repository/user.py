"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from tide.domain.model.user import User
from tide.domain.value import UserId


class UserRepository(ABC):
    """Repository for User entity.

    Balances are written here only when seeding; settlement goes through
    LedgerRepository.append so balances and entries change together.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users, preserving the requested order.

        Unknown IDs are skipped.

        Args:
            user_ids: User IDs to look up

        Returns:
            Users found, in the order requested
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass
