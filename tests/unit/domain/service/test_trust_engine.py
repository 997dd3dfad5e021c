"""Unit tests for TrustEngine and the trust function."""

import math

import pytest

from tide.domain.error import NotFoundError
from tide.domain.service import LedgerService, TrustEngine, compute_trust
from tide.domain.service.trust_engine import MAX_TRUST
from tide.domain.value import CommunityId, UserId
from tests.harness import create_env_fixture

# Unit test fixture - static seed catalog
unit_env = create_env_fixture()


class TestComputeTrust:
    """Tests for the trust formula."""

    def test_no_exchanges_is_zero(self):
        """A community without exchanges has zero trust."""
        assert compute_trust(0, 3, 0.5) == 0.0

    def test_formula(self):
        """trust = 1 - exp(-k * exchanges / users)."""
        assert compute_trust(3, 3, 0.5) == pytest.approx(1 - math.exp(-0.5))

    def test_empty_community_uses_one_member(self):
        """Zero users is treated as one to avoid division by zero."""
        assert compute_trust(2, 0, 0.5) == pytest.approx(1 - math.exp(-1.0))

    def test_monotonic_in_exchanges(self):
        """More exchanges never lower trust for a fixed size."""
        scores = [compute_trust(n, 4, 0.5) for n in range(50)]
        assert scores == sorted(scores)

    def test_never_reaches_one(self):
        """Even huge activity stays strictly below 1."""
        score = compute_trust(10_000, 1, 0.5)
        assert score < 1.0
        assert score == MAX_TRUST

    @pytest.mark.parametrize("k", [0, -1.0])
    def test_rejects_non_positive_k(self, k):
        """k must be positive."""
        with pytest.raises(ValueError):
            compute_trust(1, 1, k)

    def test_rejects_negative_counts(self):
        """Counts must be non-negative."""
        with pytest.raises(ValueError):
            compute_trust(-1, 1, 0.5)


class TestTrustEngine:
    """Tests for TrustEngine scores."""

    @pytest.mark.asyncio
    async def test_initial_score_is_zero(self, unit_env):
        """Fresh community has trust 0."""
        trust_engine = await unit_env.get(TrustEngine)

        score = await trust_engine.score(CommunityId("reef"))

        assert score.value == 0.0
        assert score.exchanges == 0
        assert score.users == 3

    @pytest.mark.asyncio
    async def test_score_updates_after_transfer(self, unit_env):
        """Settling a transfer recomputes the community's trust."""
        # Arrange
        trust_engine = await unit_env.get(TrustEngine)
        ledger_service = await unit_env.get(LedgerService)
        before = await trust_engine.score(CommunityId("reef"))

        # Act
        await ledger_service.transfer(UserId("bruno"), UserId("ana"), 3)

        # Assert
        after = await trust_engine.score(CommunityId("reef"))
        assert after.value > before.value
        assert after.value == pytest.approx(1 - math.exp(-0.5 / 3))
        assert after.exchanges == 1

    @pytest.mark.asyncio
    async def test_other_community_unaffected(self, unit_env):
        """Trust is per community."""
        trust_engine = await unit_env.get(TrustEngine)
        ledger_service = await unit_env.get(LedgerService)

        await ledger_service.transfer(UserId("bruno"), UserId("ana"), 3)

        harbor = await trust_engine.score(CommunityId("harbor"))
        assert harbor.value == 0.0

    @pytest.mark.asyncio
    async def test_unknown_community(self, unit_env):
        """Unknown community should raise NotFoundError."""
        trust_engine = await unit_env.get(TrustEngine)

        with pytest.raises(NotFoundError):
            await trust_engine.score(CommunityId("nowhere"))
