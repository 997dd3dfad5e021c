"""Community aggregate root.

A community is a named group of users sharing one token economy and one
ledger.
"""

from pydantic import Field, field_validator

from tide.domain.model.common import DomainModel
from tide.domain.value import CommunityId, UserId


class Community(DomainModel):
    """Community aggregate root.

    Members are kept in seed order and are unique per community.
    """

    id: CommunityId
    name: str = Field(min_length=1)
    user_ids: tuple[UserId, ...] = ()

    @field_validator("user_ids")
    @classmethod
    def validate_unique_members(cls, v: tuple[UserId, ...]) -> tuple[UserId, ...]:
        """Reject duplicate member references."""
        if len(set(v)) != len(v):
            raise ValueError("Community members must be unique")
        return v

    @property
    def size(self) -> int:
        """Number of members."""
        return len(self.user_ids)

    def has_member(self, user_id: UserId) -> bool:
        """Check whether a user belongs to this community."""
        return user_id in self.user_ids
