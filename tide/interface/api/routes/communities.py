"""Community routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from tide.application import CommunityNetwork, CommunityView, EngineFacade, MetricsView
from tide.domain.value import CommunityId

router = APIRouter(prefix="/communities", tags=["communities"], route_class=DishkaRoute)


class TrustResponse(BaseModel):
    """Trust score of a community."""

    community_id: str
    trust: float


@router.get("", response_model=list[CommunityView])
async def list_communities(
    engine: FromDishka[EngineFacade],
) -> list[CommunityView]:
    """List communities with their members and balances."""
    return await engine.list_communities()


@router.get("/{community_id}/trust", response_model=TrustResponse)
async def get_trust(
    community_id: str,
    engine: FromDishka[EngineFacade],
) -> TrustResponse:
    """Get the trust score of a community.

    Raises:
        NotFoundError: If community not found (404)
    """
    trust = await engine.trust_score(CommunityId(community_id))
    return TrustResponse(community_id=community_id, trust=trust)


@router.get("/{community_id}/metrics", response_model=MetricsView)
async def get_metrics(
    community_id: str,
    engine: FromDishka[EngineFacade],
) -> MetricsView:
    """Get exchanges, circulated tokens, people and trust of a community."""
    return await engine.community_metrics(CommunityId(community_id))


@router.get("/{community_id}/network", response_model=CommunityNetwork)
async def get_network(
    community_id: str,
    engine: FromDishka[EngineFacade],
) -> CommunityNetwork:
    """Get the exchange graph of a community.

    Example:
        GET /communities/reef/network

        Response:
        {
            "community_id": "reef",
            "trust": 0.39,
            "nodes": [{"user_id": "ana", "name": "Ana", "token_balance": 13}],
            "edges": [{"from_user_id": "bruno", "to_user_id": "ana",
                       "exchanges": 1, "tokens": 3}]
        }
    """
    return await engine.community_network(CommunityId(community_id))
