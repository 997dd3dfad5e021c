"""User entity.

Users hold Trust Tokens inside exactly one community's economy.
"""

from pydantic import Field

from tide.domain.model.common import DomainModel
from tide.domain.value import CommunityId, UserId


class User(DomainModel):
    """User entity.

    Business rules:
    - Balance is never negative
    - Balance is only changed by ledger settlement (or seeding)
    """

    id: UserId
    name: str = Field(min_length=1)
    community_id: CommunityId
    token_balance: int = Field(default=0, ge=0)

    def can_afford(self, tokens: int) -> bool:
        """Check whether the balance covers a token amount."""
        return self.token_balance >= tokens
