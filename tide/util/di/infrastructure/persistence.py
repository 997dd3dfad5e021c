"""Persistence infrastructure providers."""

import logfire
from dishka import Scope, provide

from tide.domain.repository import (
    CommunityRepository,
    LedgerRepository,
    TruequeRepository,
    UserRepository,
)
from tide.domain.service import SeedSource, catalog_from_seed
from tide.persistence.repository import (
    InMemoryCommunityRepository,
    InMemoryLedgerRepository,
    InMemoryTruequeRepository,
    InMemoryUserRepository,
)
from tide.persistence.store import EngineStore
from tide.util.di.base import ProviderBase


class PersistenceProvider(ProviderBase):
    """In-memory persistence provider.

    One EngineStore per container, seeded with the catalog before any
    repository or service can see it. Every repository is a view onto it.
    """

    scope = Scope.APP

    @provide
    async def get_store(self, seed_source: SeedSource) -> EngineStore:
        """Provide the engine store loaded with the seed catalog.

        Raises:
            ValidationError: If the seed repeats a community or user ID
        """
        with logfire.span("persistence.seed_store"):
            communities, users = catalog_from_seed(await seed_source.load())
            store = EngineStore()
            store.load_catalog(communities, users)
            logfire.info(
                "Engine store seeded",
                communities=len(communities),
                users=len(users),
            )
            return store

    @provide
    def get_community_repository(self, store: EngineStore) -> CommunityRepository:
        """Provide Community repository."""
        return InMemoryCommunityRepository(store)

    @provide
    def get_user_repository(self, store: EngineStore) -> UserRepository:
        """Provide User repository."""
        return InMemoryUserRepository(store)

    @provide
    def get_trueque_repository(self, store: EngineStore) -> TruequeRepository:
        """Provide Trueque repository."""
        return InMemoryTruequeRepository(store)

    @provide
    def get_ledger_repository(self, store: EngineStore) -> LedgerRepository:
        """Provide Ledger repository."""
        return InMemoryLedgerRepository(store)
