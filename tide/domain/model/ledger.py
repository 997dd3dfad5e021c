"""Ledger entries and read views.

The ledger is the append-only, sequence-numbered history of settled
transfers. Entries are never mutated or removed once appended.
"""

from collections.abc import Iterator, Sequence
from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from tide.domain.model.common import DomainModel
from tide.domain.value import CommunityId, LedgerEntryId, TruequeId, UserId


class LedgerEntry(DomainModel):
    """A settled transfer of Trust Tokens between two members."""

    id: LedgerEntryId
    sequence: int = Field(ge=1)
    from_user_id: UserId
    to_user_id: UserId
    tokens: int = Field(ge=0)
    community_id: CommunityId
    trueque_id: Optional[TruequeId] = None
    recorded_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_distinct_parties(self) -> "LedgerEntry":
        """A transfer always moves value between two different users."""
        if self.from_user_id == self.to_user_id:
            raise ValueError("Ledger entry parties must differ")
        return self

    def to_export(self) -> dict:
        """Export shape used for persistence and fixtures."""
        return {
            "sequence": self.sequence,
            "from": self.from_user_id,
            "to": self.to_user_id,
            "tokens": self.tokens,
        }


class LedgerView:
    """Lazy, restartable view over a prefix of the ledger.

    The view captures the ledger length when it is created, so every
    iteration yields the same entries in ascending sequence order even if
    the ledger grows meanwhile. Iteration never mutates the ledger.
    """

    def __init__(
        self,
        entries: Sequence[LedgerEntry],
        community_id: Optional[CommunityId] = None,
    ) -> None:
        self._entries = entries
        self._length = len(entries)
        self._community_id = community_id

    def __iter__(self) -> Iterator[LedgerEntry]:
        for index in range(self._length):
            entry = self._entries[index]
            if self._community_id is None or entry.community_id == self._community_id:
                yield entry

    def __len__(self) -> int:
        if self._community_id is None:
            return self._length
        return sum(1 for _ in self)

    def export(self) -> list[dict]:
        """Export every entry in the view."""
        return [entry.to_export() for entry in self]
