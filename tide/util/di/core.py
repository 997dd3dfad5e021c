"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from tide.config import Settings, TrustSettings
from tide.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_trust_settings(self, settings: Settings) -> TrustSettings:
        """Provide trust settings."""
        return settings.trust
