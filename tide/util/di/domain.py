"""Domain layer DI providers."""

from dishka import Scope, provide

from tide.config import TrustSettings
from tide.domain.repository import (
    CommunityRepository,
    LedgerRepository,
    TruequeRepository,
    UserRepository,
)
from tide.domain.service import (
    IdentityRegistry,
    LedgerService,
    OfferBoard,
    TrustEngine,
)
from tide.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are APP-scoped: they hold the engine's locks and the
    current selection, so every request must see the same instances.
    """

    scope = Scope.APP

    @provide
    def get_identity_registry(
        self,
        community_repository: CommunityRepository,
        user_repository: UserRepository,
    ) -> IdentityRegistry:
        """Provide identity registry over the seeded catalog."""
        return IdentityRegistry(
            community_repository=community_repository,
            user_repository=user_repository,
        )

    @provide
    def get_trust_engine(
        self,
        ledger_repository: LedgerRepository,
        community_repository: CommunityRepository,
        trust_settings: TrustSettings,
    ) -> TrustEngine:
        """Provide trust engine."""
        return TrustEngine(
            ledger_repository=ledger_repository,
            community_repository=community_repository,
            k=trust_settings.k,
        )

    @provide
    def get_ledger_service(
        self,
        ledger_repository: LedgerRepository,
        user_repository: UserRepository,
        trust_engine: TrustEngine,
    ) -> LedgerService:
        """Provide ledger service."""
        return LedgerService(
            ledger_repository=ledger_repository,
            user_repository=user_repository,
            trust_engine=trust_engine,
        )

    @provide
    def get_offer_board(
        self,
        trueque_repository: TruequeRepository,
        identity_registry: IdentityRegistry,
        ledger_service: LedgerService,
    ) -> OfferBoard:
        """Provide offer board."""
        return OfferBoard(
            trueque_repository=trueque_repository,
            identity_registry=identity_registry,
            ledger_service=ledger_service,
        )
