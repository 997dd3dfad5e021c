"""Seed catalog document.

The seed provider hands the engine its communities and users in this
order-preserving shape:

    {
      "communities": [
        {"id": "...", "name": "...",
         "users": [{"id": "...", "name": "...", "tokenBalance": 10}]}
      ]
    }
"""

from pydantic import ConfigDict, Field

from tide.domain.value.common import ValueObject
from tide.domain.value.identifiers import CommunityId, UserId


class SeedUser(ValueObject):
    """A user with its opening token balance."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: UserId = Field(min_length=1)
    name: str = Field(min_length=1)
    token_balance: int = Field(default=0, ge=0, alias="tokenBalance")


class SeedCommunity(ValueObject):
    """A community and its ordered members."""

    id: CommunityId = Field(min_length=1)
    name: str = Field(min_length=1)
    users: list[SeedUser] = Field(default_factory=list)


class SeedDocument(ValueObject):
    """Root of a seed catalog."""

    communities: list[SeedCommunity] = Field(default_factory=list)
