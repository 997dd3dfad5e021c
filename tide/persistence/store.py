"""In-memory engine store.

One EngineStore owns every table of the engine (communities, users, offers
and the ledger) as id-indexed dicts plus the append-only entry list.
Repositories are thin views onto a shared store. Store methods never await,
so each one runs to completion before any other coroutine sees the store.
"""

from collections import defaultdict
from dataclasses import dataclass, field

from tide.domain.model import Community, LedgerEntry, Trueque, User
from tide.domain.value import CommunityId, TruequeId, UserId


@dataclass
class EngineStore:
    """Arena holding all engine state for one process."""

    communities: dict[CommunityId, Community] = field(default_factory=dict)
    users: dict[UserId, User] = field(default_factory=dict)
    trueques: dict[TruequeId, Trueque] = field(default_factory=dict)
    ledger: list[LedgerEntry] = field(default_factory=list)
    total_exchanges: int = 0
    total_circulated: int = 0
    exchanges_by_community: dict[CommunityId, int] = field(
        default_factory=lambda: defaultdict(int)
    )
    circulated_by_community: dict[CommunityId, int] = field(
        default_factory=lambda: defaultdict(int)
    )

    @property
    def last_sequence(self) -> int:
        """Sequence number of the latest entry (0 when empty)."""
        return self.ledger[-1].sequence if self.ledger else 0

    def record_transfer(
        self, entry: LedgerEntry, debited: User, credited: User
    ) -> LedgerEntry:
        """Apply a settlement: both balances, the entry and the counters.

        Raises:
            ValueError: If the entry does not carry the next sequence number
        """
        expected = self.last_sequence + 1
        if entry.sequence != expected:
            raise ValueError(
                f"Ledger sequence {entry.sequence} out of order, expected {expected}"
            )

        self.users[debited.id] = debited
        self.users[credited.id] = credited
        self.ledger.append(entry)
        self.total_exchanges += 1
        self.total_circulated += entry.tokens
        self.exchanges_by_community[entry.community_id] += 1
        self.circulated_by_community[entry.community_id] += entry.tokens
        return entry

    def load_catalog(self, communities: list[Community], users: list[User]) -> None:
        """Insert seeded communities and users in seed order.

        Raises:
            ValueError: If the store already holds a catalog
        """
        if self.communities or self.users:
            raise ValueError("Engine store already holds a catalog")
        for user in users:
            self.users[user.id] = user
        for community in communities:
            self.communities[community.id] = community
