"""Domain services."""

from .base import Service
from .identity_registry import IdentityRegistry, SeedSource, catalog_from_seed
from .ledger_service import LedgerService
from .offer_board import OfferBoard
from .trust_engine import TrustEngine, compute_trust

__all__ = [
    "IdentityRegistry",
    "LedgerService",
    "OfferBoard",
    "SeedSource",
    "Service",
    "TrustEngine",
    "catalog_from_seed",
    "compute_trust",
]
