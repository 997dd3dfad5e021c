"""Read-only snapshots published to engine consumers.

Snapshots are built from domain records on every query; holding one never
keeps engine state alive or lets callers mutate it.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from tide.domain.model import Community, Trueque, User
from tide.domain.value import (
    CommunityId,
    OfferAction,
    TruequeId,
    TruequeStatus,
    UserId,
)


class Snapshot(BaseModel):
    """Base for immutable read models."""

    model_config = ConfigDict(frozen=True)


class UserView(Snapshot):
    """User with current balance."""

    id: UserId
    name: str
    community_id: CommunityId
    token_balance: int

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        return cls(
            id=user.id,
            name=user.name,
            community_id=user.community_id,
            token_balance=user.token_balance,
        )


class CommunityView(Snapshot):
    """Community with its members in catalog order."""

    id: CommunityId
    name: str
    users: list[UserView]

    @classmethod
    def from_community(
        cls, community: Community, members: list[User]
    ) -> "CommunityView":
        return cls(
            id=community.id,
            name=community.name,
            users=[UserView.from_user(u) for u in members],
        )


class OfferView(Snapshot):
    """Trueque annotated for one viewer."""

    id: TruequeId
    title: str
    description: str
    tokens: int
    status: TruequeStatus
    owner_id: UserId
    owner_name: str
    owner_balance: int
    community_id: CommunityId
    created_at: datetime
    updated_at: datetime
    # Viewer-relative annotations
    is_own: bool
    can_afford: bool
    actions: list[OfferAction]

    @classmethod
    def for_viewer(cls, trueque: Trueque, owner: User, viewer: User) -> "OfferView":
        """Annotate an offer with what the viewer can do with it."""
        is_own = trueque.is_owned_by(viewer.id)
        can_afford = viewer.can_afford(trueque.tokens)

        actions: list[OfferAction] = []
        if not is_own:
            for action in (OfferAction.ACCEPT, OfferAction.COUNTER, OfferAction.REJECT):
                if not trueque.allows(action):
                    continue
                if action is OfferAction.ACCEPT and not can_afford:
                    continue
                actions.append(action)

        return cls(
            id=trueque.id,
            title=trueque.title,
            description=trueque.description,
            tokens=trueque.tokens,
            status=trueque.status,
            owner_id=owner.id,
            owner_name=owner.name,
            owner_balance=owner.token_balance,
            community_id=trueque.community_id,
            created_at=trueque.created_at,
            updated_at=trueque.updated_at,
            is_own=is_own,
            can_afford=can_afford,
            actions=actions,
        )


class MetricsView(Snapshot):
    """Exchange activity of one community."""

    community_id: CommunityId
    exchanges: int
    circulated: int
    people: int
    trust: float


class TotalsView(Snapshot):
    """Engine-wide exchange counters."""

    total_exchanges: int
    total_circulated: int


class NetworkNode(Snapshot):
    """Community member as a network node."""

    user_id: UserId
    name: str
    token_balance: int


class NetworkEdge(Snapshot):
    """Settled value flowing from one member to another."""

    from_user_id: UserId
    to_user_id: UserId
    exchanges: int
    tokens: int


class CommunityNetwork(Snapshot):
    """Exchange graph of a community."""

    community_id: CommunityId
    trust: float
    nodes: list[NetworkNode]
    edges: list[NetworkEdge]


class EngineSnapshot(Snapshot):
    """State returned by every engine command."""

    community: Optional[CommunityView] = None
    user: Optional[UserView] = None
    offers: list[OfferView] = []
    metrics: Optional[MetricsView] = None
    offer: Optional[OfferView] = None  # Offer the command acted on
