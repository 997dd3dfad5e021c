"""Trueque aggregate root.

A Trueque is a barter offer worth a stated number of Trust Tokens. Its
status is a closed union: every member carries the current token value plus
the payload that only makes sense in that status, so a settled offer always
knows who accepted it and which ledger entry paid for it.

Legal transitions:

    active    --counter--> countered
    active    --accept---> accepted
    active    --reject---> rejected
    countered --accept---> accepted
    countered --reject---> rejected
"""

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import Field, field_validator

from tide.domain.model.common import DomainModel
from tide.domain.value import (
    CommunityId,
    OfferAction,
    TruequeId,
    TruequeStatus,
    UserId,
)


class Active(DomainModel):
    """Open offer at its original value."""

    status: Literal["active"] = "active"
    tokens: int = Field(ge=0)


class Countered(DomainModel):
    """Offer whose value was changed by a counter-offer."""

    status: Literal["countered"] = "countered"
    tokens: int = Field(ge=0)
    countered_by: UserId
    previous_tokens: int = Field(ge=0)


class Accepted(DomainModel):
    """Settled offer."""

    status: Literal["accepted"] = "accepted"
    tokens: int = Field(ge=0)
    accepted_by: UserId
    ledger_sequence: int = Field(ge=1)


class Rejected(DomainModel):
    """Declined offer."""

    status: Literal["rejected"] = "rejected"
    tokens: int = Field(ge=0)
    rejected_by: UserId


TruequeState = Annotated[
    Union[Active, Countered, Accepted, Rejected], Field(discriminator="status")
]

ALLOWED_ACTIONS: dict[TruequeStatus, frozenset[OfferAction]] = {
    TruequeStatus.ACTIVE: frozenset(
        {OfferAction.COUNTER, OfferAction.ACCEPT, OfferAction.REJECT}
    ),
    TruequeStatus.COUNTERED: frozenset({OfferAction.ACCEPT, OfferAction.REJECT}),
    TruequeStatus.ACCEPTED: frozenset(),
    TruequeStatus.REJECTED: frozenset(),
}


class Trueque(DomainModel):
    """Trueque aggregate root.

    Immutable: transitions produce a new record via `transition`.
    """

    id: TruequeId
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    owner_id: UserId
    community_id: CommunityId
    state: TruequeState
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("title", "description")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only text."""
        if not v.strip():
            raise ValueError("Must not be blank")
        return v

    @property
    def status(self) -> TruequeStatus:
        """Current lifecycle status."""
        return TruequeStatus(self.state.status)

    @property
    def tokens(self) -> int:
        """Current offer value (reflects counter-offers)."""
        return self.state.tokens

    @property
    def is_terminal(self) -> bool:
        """Whether the offer can no longer change."""
        return self.status.is_terminal

    def allows(self, action: OfferAction) -> bool:
        """Check whether an action is legal from the current status."""
        return action in ALLOWED_ACTIONS[self.status]

    def is_owned_by(self, user_id: UserId) -> bool:
        """Check whether a user owns this offer."""
        return self.owner_id == user_id

    def transition(
        self, state: Union[Active, Countered, Accepted, Rejected]
    ) -> "Trueque":
        """Return a copy of this offer in a new state."""
        return self.model_copy(update={"state": state, "updated_at": datetime.now()})
