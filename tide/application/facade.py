"""Engine facade.

Composition root of the barter/trust engine and the only surface the UI
layer talks to. Commands return a fresh EngineSnapshot or raise a
DomainError subclass whose `kind` names the failure; queries are pull-based
reads that never mutate state.
"""

from collections import defaultdict
from typing import Optional

import logfire

from tide.application.snapshot import (
    CommunityNetwork,
    CommunityView,
    EngineSnapshot,
    MetricsView,
    NetworkEdge,
    NetworkNode,
    OfferView,
    TotalsView,
    UserView,
)
from tide.domain.model import LedgerView, Trueque, User
from tide.domain.service import IdentityRegistry, LedgerService, OfferBoard, TrustEngine
from tide.domain.value import CommunityId, TruequeId, UserId


class EngineFacade:
    """Command/query surface over the engine's domain services."""

    def __init__(
        self,
        identity_registry: IdentityRegistry,
        offer_board: OfferBoard,
        ledger_service: LedgerService,
        trust_engine: TrustEngine,
    ) -> None:
        """Initialize engine facade.

        Args:
            identity_registry: Catalog and selection
            offer_board: Trueque lifecycle
            ledger_service: Settlement and ledger
            trust_engine: Community trust
        """
        self.identity_registry = identity_registry
        self.offer_board = offer_board
        self.ledger_service = ledger_service
        self.trust_engine = trust_engine

    # Commands

    async def select_community(self, community_id: CommunityId) -> EngineSnapshot:
        """Select a community; clears the user when the community changes."""
        await self.identity_registry.select_community(community_id)
        return await self.snapshot()

    async def select_user(self, user_id: UserId) -> EngineSnapshot:
        """Select a user of the selected community."""
        await self.identity_registry.select_user(user_id)
        return await self.snapshot()

    async def reset_selection(self) -> EngineSnapshot:
        """Clear the selection. Ledger, balances and trust persist."""
        self.identity_registry.reset()
        return await self.snapshot()

    async def create_offer(
        self, title: str, description: str, tokens: int
    ) -> EngineSnapshot:
        """Create a Trueque owned by the selected user."""
        _, user = await self.identity_registry.require_selection()
        trueque = await self.offer_board.create(title, description, tokens, user.id)
        return await self.snapshot(trueque)

    async def counter_offer(
        self, trueque_id: TruequeId, proposed_tokens: int
    ) -> EngineSnapshot:
        """Counter a Trueque as the selected user."""
        _, user = await self.identity_registry.require_selection()
        trueque = await self.offer_board.counter(trueque_id, proposed_tokens, user.id)
        return await self.snapshot(trueque)

    async def accept_offer(self, trueque_id: TruequeId) -> EngineSnapshot:
        """Accept a Trueque as the selected user, paying its owner."""
        _, user = await self.identity_registry.require_selection()
        trueque = await self.offer_board.accept(trueque_id, user.id)
        return await self.snapshot(trueque)

    async def reject_offer(self, trueque_id: TruequeId) -> EngineSnapshot:
        """Reject a Trueque as the selected user."""
        _, user = await self.identity_registry.require_selection()
        trueque = await self.offer_board.reject(trueque_id, user.id)
        return await self.snapshot(trueque)

    # Queries

    async def snapshot(self, acted_on: Optional[Trueque] = None) -> EngineSnapshot:
        """Build the snapshot for the current selection.

        Args:
            acted_on: Offer the last command touched, annotated for the
                selected user when there is one
        """
        with logfire.span("engine.snapshot"):
            community = await self.current_community()
            user = await self.identity_registry.current_user()

            offers: list[OfferView] = []
            offer: Optional[OfferView] = None
            if user is not None:
                offers = await self.offers_visible_to(user.id)
                if acted_on is not None:
                    offer = next((o for o in offers if o.id == acted_on.id), None)

            metrics = (
                await self.community_metrics(community.id) if community else None
            )
            return EngineSnapshot(
                community=community,
                user=UserView.from_user(user) if user else None,
                offers=offers,
                metrics=metrics,
                offer=offer,
            )

    async def list_communities(self) -> list[CommunityView]:
        """All communities with their members."""
        return [
            await self._community_view(community.id)
            for community in await self.identity_registry.list_communities()
        ]

    async def current_community(self) -> Optional[CommunityView]:
        """Selected community, if any."""
        community = await self.identity_registry.current_community()
        if community is None:
            return None
        return await self._community_view(community.id)

    async def current_user(self) -> Optional[UserView]:
        """Selected user, if any."""
        user = await self.identity_registry.current_user()
        return UserView.from_user(user) if user else None

    async def ledger_entries(
        self, community_id: Optional[CommunityId] = None
    ) -> LedgerView:
        """Lazy view of settled entries in sequence order."""
        return await self.ledger_service.entries(community_id)

    async def export_ledger(
        self, community_id: Optional[CommunityId] = None
    ) -> list[dict]:
        """Ledger in `{sequence, from, to, tokens}` export shape."""
        return await self.ledger_service.export(community_id)

    async def trust_score(self, community_id: CommunityId) -> float:
        """Trust score of a community in [0, 1)."""
        score = await self.trust_engine.score(community_id)
        return score.value

    async def total_exchanges(self) -> int:
        """Settled exchanges across all communities."""
        return await self.ledger_service.total_exchanges()

    async def total_circulated(self) -> int:
        """Tokens circulated across all communities."""
        return await self.ledger_service.total_circulated()

    async def totals(self) -> TotalsView:
        """Engine-wide counters."""
        return TotalsView(
            total_exchanges=await self.total_exchanges(),
            total_circulated=await self.total_circulated(),
        )

    async def offers_visible_to(self, user_id: UserId) -> list[OfferView]:
        """Offers of the user's community, annotated for that user.

        Raises:
            NotFoundError: If user not found
        """
        viewer = await self.identity_registry.get_user(user_id)
        members = {
            u.id: u for u in await self.identity_registry.members_of(viewer.community_id)
        }
        trueques = await self.offer_board.list_for_community(viewer.community_id)
        return [
            OfferView.for_viewer(t, members[t.owner_id], viewer)
            for t in trueques
            if t.owner_id in members
        ]

    async def community_metrics(self, community_id: CommunityId) -> MetricsView:
        """Exchange activity, size and trust of a community.

        Raises:
            NotFoundError: If community not found
        """
        community = await self.identity_registry.get_community(community_id)
        score = await self.trust_engine.score(community.id)
        return MetricsView(
            community_id=community.id,
            exchanges=await self.ledger_service.exchange_count(community.id),
            circulated=await self.ledger_service.circulated(community.id),
            people=community.size,
            trust=score.value,
        )

    async def community_network(self, community_id: CommunityId) -> CommunityNetwork:
        """Members as nodes and settled transfers aggregated into edges.

        Raises:
            NotFoundError: If community not found
        """
        members = await self.identity_registry.members_of(community_id)
        score = await self.trust_engine.score(community_id)

        exchanges: dict[tuple[UserId, UserId], int] = defaultdict(int)
        tokens: dict[tuple[UserId, UserId], int] = defaultdict(int)
        for entry in await self.ledger_service.entries(community_id):
            pair = (entry.from_user_id, entry.to_user_id)
            exchanges[pair] += 1
            tokens[pair] += entry.tokens

        return CommunityNetwork(
            community_id=community_id,
            trust=score.value,
            nodes=[
                NetworkNode(user_id=u.id, name=u.name, token_balance=u.token_balance)
                for u in members
            ],
            edges=[
                NetworkEdge(
                    from_user_id=pair[0],
                    to_user_id=pair[1],
                    exchanges=count,
                    tokens=tokens[pair],
                )
                for pair, count in exchanges.items()
            ],
        )

    async def _community_view(self, community_id: CommunityId) -> CommunityView:
        community = await self.identity_registry.get_community(community_id)
        members: list[User] = await self.identity_registry.members_of(community.id)
        return CommunityView.from_community(community, members)
