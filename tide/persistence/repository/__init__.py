"""In-memory repository implementations backed by a shared EngineStore."""

from tide.persistence.repository.community import InMemoryCommunityRepository
from tide.persistence.repository.ledger import InMemoryLedgerRepository
from tide.persistence.repository.trueque import InMemoryTruequeRepository
from tide.persistence.repository.user import InMemoryUserRepository

__all__ = [
    "InMemoryCommunityRepository",
    "InMemoryUserRepository",
    "InMemoryTruequeRepository",
    "InMemoryLedgerRepository",
]
