"""Ledger and metrics routes."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel, Field

from tide.application import EngineFacade, TotalsView
from tide.domain.value import CommunityId

router = APIRouter(tags=["ledger"], route_class=DishkaRoute)


class LedgerEntryExport(BaseModel):
    """Exported ledger entry."""

    sequence: int
    from_user: str = Field(alias="from")
    to_user: str = Field(alias="to")
    tokens: int


@router.get(
    "/ledger",
    response_model=list[LedgerEntryExport],
    response_model_by_alias=True,
)
async def get_ledger(
    engine: FromDishka[EngineFacade],
    community_id: Optional[str] = None,
) -> list[dict]:
    """Export settled entries in sequence order.

    Example:
        GET /ledger

        Response:
        [{"sequence": 1, "from": "bruno", "to": "ana", "tokens": 3}]
    """
    return await engine.export_ledger(
        CommunityId(community_id) if community_id else None
    )


@router.get("/metrics", response_model=TotalsView)
async def get_totals(engine: FromDishka[EngineFacade]) -> TotalsView:
    """Get total exchanges and tokens circulated across all communities."""
    return await engine.totals()
