"""Ledger repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from tide.domain.model.ledger import LedgerEntry, LedgerView
from tide.domain.model.user import User
from tide.domain.value import CommunityId


class LedgerRepository(ABC):
    """Repository for the append-only ledger and its counters.

    The ledger also owns balance writes during settlement: `append` stores
    the entry together with both updated users as a single unit.
    """

    @abstractmethod
    async def append(
        self, entry: LedgerEntry, debited: User, credited: User
    ) -> LedgerEntry:
        """Append an entry and store the updated balances atomically.

        Readers observe either none or all of: both balances, the entry and
        the counters.

        Args:
            entry: The entry to append; its sequence must be the next one
            debited: Payer with its balance already decreased
            credited: Payee with its balance already increased

        Returns:
            The appended entry

        Raises:
            ValueError: If the sequence number is not the next one
        """
        pass

    @abstractmethod
    async def last_sequence(self) -> int:
        """Return the sequence number of the latest entry (0 when empty)."""
        pass

    @abstractmethod
    async def view(self, community_id: Optional[CommunityId] = None) -> LedgerView:
        """Return a lazy view of the ledger as it is now.

        Args:
            community_id: Restrict the view to one community

        Returns:
            View iterating entries in ascending sequence order
        """
        pass

    @abstractmethod
    async def total_exchanges(self) -> int:
        """Number of settled entries."""
        pass

    @abstractmethod
    async def total_circulated(self) -> int:
        """Sum of settled tokens."""
        pass

    @abstractmethod
    async def count_by_community(self, community_id: CommunityId) -> int:
        """Number of settled entries within a community."""
        pass

    @abstractmethod
    async def circulated_by_community(self, community_id: CommunityId) -> int:
        """Sum of settled tokens within a community."""
        pass
