"""Trueque offer routes.

Offer commands act as the currently selected user.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from pydantic import BaseModel

from tide.application import EngineFacade, EngineSnapshot, OfferView
from tide.domain.value import TruequeId, UserId

router = APIRouter(tags=["offers"], route_class=DishkaRoute)


class CreateOfferRequest(BaseModel):
    """API request for creating a Trueque."""

    title: str
    description: str
    tokens: int


class CounterOfferRequest(BaseModel):
    """API request for countering a Trueque."""

    tokens: int


@router.post(
    "/offers", response_model=EngineSnapshot, status_code=status.HTTP_201_CREATED
)
async def create_offer(
    request: CreateOfferRequest,
    engine: FromDishka[EngineFacade],
) -> EngineSnapshot:
    """Create a Trueque owned by the selected user.

    Example:
        POST /offers
        {"title": "Bread", "description": "Two loaves", "tokens": 3}

    Raises:
        SelectionError: If no user is selected (409)
        ValidationError: If title/description is empty or tokens < 0 (422)
    """
    return await engine.create_offer(request.title, request.description, request.tokens)


@router.post("/offers/{trueque_id}/counter", response_model=EngineSnapshot)
async def counter_offer(
    trueque_id: UUID,
    request: CounterOfferRequest,
    engine: FromDishka[EngineFacade],
) -> EngineSnapshot:
    """Propose a new value for an active Trueque."""
    return await engine.counter_offer(TruequeId(trueque_id), request.tokens)


@router.post("/offers/{trueque_id}/accept", response_model=EngineSnapshot)
async def accept_offer(
    trueque_id: UUID,
    engine: FromDishka[EngineFacade],
) -> EngineSnapshot:
    """Accept a Trueque; the selected user pays its value to the owner."""
    return await engine.accept_offer(TruequeId(trueque_id))


@router.post("/offers/{trueque_id}/reject", response_model=EngineSnapshot)
async def reject_offer(
    trueque_id: UUID,
    engine: FromDishka[EngineFacade],
) -> EngineSnapshot:
    """Reject a Trueque."""
    return await engine.reject_offer(TruequeId(trueque_id))


@router.get("/users/{user_id}/offers", response_model=list[OfferView])
async def offers_visible_to(
    user_id: str,
    engine: FromDishka[EngineFacade],
) -> list[OfferView]:
    """List offers of a user's community annotated for that user."""
    return await engine.offers_visible_to(UserId(user_id))
