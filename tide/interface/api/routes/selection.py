"""Selection routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from tide.application import EngineFacade, EngineSnapshot
from tide.domain.value import CommunityId, UserId

router = APIRouter(prefix="/selection", tags=["selection"], route_class=DishkaRoute)


class SelectCommunityRequest(BaseModel):
    """API request for selecting a community."""

    community_id: str


class SelectUserRequest(BaseModel):
    """API request for selecting a user."""

    user_id: str


@router.get("", response_model=EngineSnapshot)
async def get_selection(engine: FromDishka[EngineFacade]) -> EngineSnapshot:
    """Get the snapshot for the current selection."""
    return await engine.snapshot()


@router.put("/community", response_model=EngineSnapshot)
async def select_community(
    request: SelectCommunityRequest,
    engine: FromDishka[EngineFacade],
) -> EngineSnapshot:
    """Select a community.

    Raises:
        NotFoundError: If community not found (404)
    """
    return await engine.select_community(CommunityId(request.community_id))


@router.put("/user", response_model=EngineSnapshot)
async def select_user(
    request: SelectUserRequest,
    engine: FromDishka[EngineFacade],
) -> EngineSnapshot:
    """Select a user of the selected community.

    Raises:
        SelectionError: If no community is selected or the user is outside it (409)
    """
    return await engine.select_user(UserId(request.user_id))


@router.delete("", response_model=EngineSnapshot)
async def reset_selection(engine: FromDishka[EngineFacade]) -> EngineSnapshot:
    """Clear the selection. Balances, ledger and trust are kept."""
    return await engine.reset_selection()
