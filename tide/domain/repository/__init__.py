"""Repository interfaces for Trueque Tide domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from tide.domain.repository.community import CommunityRepository
from tide.domain.repository.ledger import LedgerRepository
from tide.domain.repository.trueque import TruequeRepository
from tide.domain.repository.user import UserRepository

__all__ = [
    "CommunityRepository",
    "UserRepository",
    "TruequeRepository",
    "LedgerRepository",
]
