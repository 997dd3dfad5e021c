"""Domain value objects for Trueque Tide.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum
from typing import Optional

from tide.domain.value.common import ValueObject
from tide.domain.value.identifiers import CommunityId, UserId


class TruequeStatus(str, Enum):
    """Lifecycle status of a Trueque.

    `accepted` and `rejected` are terminal.
    """

    ACTIVE = "active"
    COUNTERED = "countered"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transitions are possible."""
        return self in (TruequeStatus.ACCEPTED, TruequeStatus.REJECTED)


class OfferAction(str, Enum):
    """Commands a non-owner can issue against a Trueque."""

    COUNTER = "counter"
    ACCEPT = "accept"
    REJECT = "reject"


class ErrorKind(str, Enum):
    """Typed failure kinds surfaced to engine callers."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SELECTION = "selection"
    ILLEGAL_TRANSITION = "illegal_transition"
    SELF_ACTION = "self_action"
    INSUFFICIENT_BALANCE = "insufficient_balance"


class Selection(ValueObject):
    """Current navigation selection.

    A user can only be selected together with the community it belongs to.
    """

    community_id: Optional[CommunityId] = None
    user_id: Optional[UserId] = None

    @property
    def is_complete(self) -> bool:
        """Whether both a community and a user are selected."""
        return self.community_id is not None and self.user_id is not None
