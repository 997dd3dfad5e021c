"""Trust engine domain service.

Community trust grows with settled exchanges per member and saturates
below 1:

    trust = 1 - exp(-k * exchanges / max(users, 1))
"""

import math

import logfire

from tide.domain.error import NotFoundError
from tide.domain.model import TrustScore
from tide.domain.repository import CommunityRepository, LedgerRepository
from tide.domain.value import CommunityId

from .base import Service

# Largest float below 1.0; finite activity never reports full trust
MAX_TRUST = math.nextafter(1.0, 0.0)


def compute_trust(exchanges: int, users: int, k: float) -> float:
    """Compute a trust score.

    Args:
        exchanges: Settled exchanges in the community
        users: Community size
        k: Growth constant, must be positive

    Returns:
        Score in [0, 1)

    Raises:
        ValueError: If k is not positive or a count is negative
    """
    if k <= 0:
        raise ValueError("Trust constant k must be positive")
    if exchanges < 0 or users < 0:
        raise ValueError("Counts must be non-negative")

    exchanges_per_user = exchanges / max(users, 1)
    return min(1.0 - math.exp(-k * exchanges_per_user), MAX_TRUST)


class TrustEngine(Service):
    """Domain service deriving community trust from ledger activity."""

    def __init__(
        self,
        ledger_repository: LedgerRepository,
        community_repository: CommunityRepository,
        k: float,
    ) -> None:
        """Initialize trust engine.

        Args:
            ledger_repository: Ledger repository (exchange counters)
            community_repository: Community repository (member counts)
            k: Growth constant

        Raises:
            ValueError: If k is not positive
        """
        if k <= 0:
            raise ValueError("Trust constant k must be positive")
        self.ledger_repository = ledger_repository
        self.community_repository = community_repository
        self.k = k
        self._scores: dict[CommunityId, TrustScore] = {}

    async def recompute(self, community_id: CommunityId) -> TrustScore:
        """Recompute and remember the trust score of a community.

        Args:
            community_id: Community ID

        Returns:
            Fresh trust score

        Raises:
            NotFoundError: If community not found
        """
        with logfire.span("trust_engine.recompute", community_id=str(community_id)):
            community = await self.community_repository.find_by_id(community_id)
            if not community:
                raise NotFoundError("Community", str(community_id))

            exchanges = await self.ledger_repository.count_by_community(community_id)
            score = TrustScore(
                community_id=community_id,
                value=compute_trust(exchanges, community.size, self.k),
                exchanges=exchanges,
                users=community.size,
            )
            self._scores[community_id] = score
            logfire.info(
                "Trust recomputed",
                community_id=str(community_id),
                trust=score.value,
                exchanges=exchanges,
                users=community.size,
            )
            return score

    async def score(self, community_id: CommunityId) -> TrustScore:
        """Get the latest trust score, computing it on first request.

        Args:
            community_id: Community ID

        Returns:
            Trust score

        Raises:
            NotFoundError: If community not found
        """
        cached = self._scores.get(community_id)
        if cached is not None:
            return cached
        return await self.recompute(community_id)
