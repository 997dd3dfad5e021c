"""Application layer DI providers."""

from dishka import Scope, provide

from tide.application import EngineFacade
from tide.domain.service import IdentityRegistry, LedgerService, OfferBoard, TrustEngine
from tide.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application provider - concrete, no mocks needed."""

    @provide(scope=Scope.APP)
    def get_engine_facade(
        self,
        identity_registry: IdentityRegistry,
        offer_board: OfferBoard,
        ledger_service: LedgerService,
        trust_engine: TrustEngine,
    ) -> EngineFacade:
        """Provide engine facade."""
        return EngineFacade(
            identity_registry=identity_registry,
            offer_board=offer_board,
            ledger_service=ledger_service,
            trust_engine=trust_engine,
        )
