"""Application layer: engine facade and read models."""

from .facade import EngineFacade
from .snapshot import (
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

__all__ = [
    "EngineFacade",
    "CommunityNetwork",
    "CommunityView",
    "EngineSnapshot",
    "MetricsView",
    "NetworkEdge",
    "NetworkNode",
    "OfferView",
    "TotalsView",
    "UserView",
]
