"""Unit tests for EngineFacade."""

import pytest

from tide.application import EngineFacade
from tide.domain.error import (
    IllegalTransitionError,
    InsufficientBalanceError,
    SelectionError,
    SelfActionError,
)
from tide.domain.value import CommunityId, OfferAction, TruequeStatus, UserId
from tests.harness import create_env_fixture

# Unit test fixture - static seed catalog
unit_env = create_env_fixture()


async def _act_as(engine: EngineFacade, community: str, user: str) -> None:
    await engine.select_community(CommunityId(community))
    await engine.select_user(UserId(user))


async def _reef_balance_total(engine: EngineFacade) -> int:
    communities = await engine.list_communities()
    reef = next(c for c in communities if c.id == "reef")
    return sum(u.token_balance for u in reef.users)


class TestScenarios:
    """End-to-end engine scenarios through the facade."""

    @pytest.mark.asyncio
    async def test_accept_settles_offer(self, unit_env):
        """A (10) offers 3; B (5) accepts: A=13, B=2, one entry."""
        # Arrange
        engine = await unit_env.get(EngineFacade)
        await _act_as(engine, "reef", "ana")
        created = await engine.create_offer("Bread", "Two loaves", 3)
        trueque_id = created.offer.id

        # Act
        await engine.select_user(UserId("bruno"))
        snapshot = await engine.accept_offer(trueque_id)

        # Assert
        assert snapshot.offer.status == TruequeStatus.ACCEPTED
        assert snapshot.user.token_balance == 2
        balances = {u.id: u.token_balance for u in snapshot.community.users}
        assert balances["ana"] == 13
        assert balances["bruno"] == 2
        assert await engine.export_ledger() == [
            {"sequence": 1, "from": "bruno", "to": "ana", "tokens": 3}
        ]
        assert await engine.total_exchanges() == 1
        assert await engine.total_circulated() == 3
        assert snapshot.metrics.exchanges == 1
        assert snapshot.metrics.trust > 0

    @pytest.mark.asyncio
    async def test_owner_cannot_accept_countered_offer(self, unit_env):
        """B counters to 7; A accepting their own offer fails."""
        # Arrange
        engine = await unit_env.get(EngineFacade)
        await _act_as(engine, "reef", "ana")
        trueque_id = (await engine.create_offer("Bread", "Two loaves", 3)).offer.id
        await engine.select_user(UserId("bruno"))

        # Act
        countered = await engine.counter_offer(trueque_id, 7)
        await engine.select_user(UserId("ana"))

        # Assert
        assert countered.offer.status == TruequeStatus.COUNTERED
        assert countered.offer.tokens == 7
        with pytest.raises(SelfActionError):
            await engine.accept_offer(trueque_id)

    @pytest.mark.asyncio
    async def test_insufficient_balance_leaves_state_unchanged(self, unit_env):
        """C (2) accepting an offer of 3 fails without side effects."""
        # Arrange
        engine = await unit_env.get(EngineFacade)
        await _act_as(engine, "reef", "ana")
        trueque_id = (await engine.create_offer("Bread", "Two loaves", 3)).offer.id
        await engine.select_user(UserId("carla"))
        before = await engine.snapshot()

        # Act & Assert
        with pytest.raises(InsufficientBalanceError):
            await engine.accept_offer(trueque_id)
        after = await engine.snapshot()
        assert after == before
        assert await engine.total_exchanges() == 0

    @pytest.mark.asyncio
    async def test_accept_after_reject_is_illegal(self, unit_env):
        """A rejected offer cannot be accepted by anyone."""
        # Arrange
        engine = await unit_env.get(EngineFacade)
        await _act_as(engine, "reef", "ana")
        trueque_id = (await engine.create_offer("Bread", "Two loaves", 3)).offer.id
        await engine.select_user(UserId("bruno"))
        await engine.reject_offer(trueque_id)

        # Act & Assert
        for user in ("ana", "bruno", "carla"):
            await engine.select_user(UserId(user))
            with pytest.raises(IllegalTransitionError):
                await engine.accept_offer(trueque_id)

    @pytest.mark.asyncio
    async def test_select_user_outside_community(self, unit_env):
        """Selecting a non-member fails and keeps the selection."""
        # Arrange
        engine = await unit_env.get(EngineFacade)
        await _act_as(engine, "reef", "ana")

        # Act & Assert
        with pytest.raises(SelectionError):
            await engine.select_user(UserId("diego"))
        current = await engine.current_user()
        assert current.id == "ana"


class TestCommands:
    """Tests for selection guards and idempotence."""

    @pytest.mark.asyncio
    async def test_commands_require_selected_user(self, unit_env):
        """Offer commands without a selected user fail with SelectionError."""
        engine = await unit_env.get(EngineFacade)
        await engine.select_community(CommunityId("reef"))

        with pytest.raises(SelectionError):
            await engine.create_offer("Bread", "Two loaves", 3)

    @pytest.mark.asyncio
    async def test_create_then_reject_changes_no_balances(self, unit_env):
        """Offers that never settle leave balances and counters untouched."""
        # Arrange
        engine = await unit_env.get(EngineFacade)
        await _act_as(engine, "reef", "ana")
        before = await _reef_balance_total(engine)
        trueque_id = (await engine.create_offer("Bread", "Two loaves", 3)).offer.id

        # Act
        await engine.select_user(UserId("bruno"))
        await engine.reject_offer(trueque_id)

        # Assert
        assert await _reef_balance_total(engine) == before
        assert await engine.total_exchanges() == 0
        assert await engine.trust_score(CommunityId("reef")) == 0.0

    @pytest.mark.asyncio
    async def test_balances_conserved_across_settlements(self, unit_env):
        """Settlement moves tokens within a community without creating any."""
        # Arrange
        engine = await unit_env.get(EngineFacade)
        await _act_as(engine, "reef", "ana")
        before = await _reef_balance_total(engine)
        first = (await engine.create_offer("Bread", "Loaves", 3)).offer.id
        second = (await engine.create_offer("Eggs", "A dozen", 4)).offer.id

        # Act
        await engine.select_user(UserId("bruno"))
        await engine.accept_offer(first)
        await engine.counter_offer(second, 1)
        await engine.select_user(UserId("carla"))
        await engine.accept_offer(second)

        # Assert
        assert await _reef_balance_total(engine) == before
        assert await engine.total_circulated() == 4
        metrics = await engine.community_metrics(CommunityId("reef"))
        assert metrics.exchanges == 2
        assert metrics.people == 3

    @pytest.mark.asyncio
    async def test_reset_keeps_ledger(self, unit_env):
        """Reset clears navigation only."""
        # Arrange
        engine = await unit_env.get(EngineFacade)
        await _act_as(engine, "reef", "ana")
        trueque_id = (await engine.create_offer("Bread", "Loaves", 3)).offer.id
        await engine.select_user(UserId("bruno"))
        await engine.accept_offer(trueque_id)

        # Act
        snapshot = await engine.reset_selection()

        # Assert
        assert snapshot.community is None
        assert snapshot.user is None
        assert snapshot.offers == []
        assert len(await engine.ledger_entries()) == 1


class TestQueries:
    """Tests for facade queries."""

    @pytest.mark.asyncio
    async def test_offers_annotated_for_viewer(self, unit_env):
        """Actions depend on ownership, status and the viewer's balance."""
        # Arrange
        engine = await unit_env.get(EngineFacade)
        await _act_as(engine, "reef", "ana")
        await engine.create_offer("Bread", "Loaves", 3)

        # Act
        own = await engine.offers_visible_to(UserId("ana"))
        rich = await engine.offers_visible_to(UserId("bruno"))
        poor = await engine.offers_visible_to(UserId("carla"))
        outsider = await engine.offers_visible_to(UserId("diego"))

        # Assert
        assert own[0].is_own and own[0].actions == []
        assert rich[0].actions == [
            OfferAction.ACCEPT,
            OfferAction.COUNTER,
            OfferAction.REJECT,
        ]
        assert not poor[0].can_afford
        assert poor[0].actions == [OfferAction.COUNTER, OfferAction.REJECT]
        assert outsider == []

    @pytest.mark.asyncio
    async def test_community_network_aggregates_edges(self, unit_env):
        """Transfers between the same pair collapse into one edge."""
        # Arrange
        engine = await unit_env.get(EngineFacade)
        await _act_as(engine, "reef", "ana")
        first = (await engine.create_offer("Bread", "Loaves", 1)).offer.id
        second = (await engine.create_offer("Eggs", "A dozen", 2)).offer.id
        await engine.select_user(UserId("bruno"))
        await engine.accept_offer(first)
        await engine.accept_offer(second)

        # Act
        network = await engine.community_network(CommunityId("reef"))

        # Assert
        assert [n.user_id for n in network.nodes] == ["ana", "bruno", "carla"]
        assert len(network.edges) == 1
        edge = network.edges[0]
        assert (edge.from_user_id, edge.to_user_id) == ("bruno", "ana")
        assert edge.exchanges == 2
        assert edge.tokens == 3

    @pytest.mark.asyncio
    async def test_list_communities(self, unit_env):
        engine = await unit_env.get(EngineFacade)

        communities = await engine.list_communities()

        assert [c.name for c in communities] == ["Coral Reef", "Old Harbor"]
        assert [u.id for u in communities[1].users] == ["diego", "elena"]
