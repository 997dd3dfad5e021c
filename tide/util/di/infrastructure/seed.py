"""Seed infrastructure providers."""

import logfire
from dishka import Scope, provide

from tide.adapter.seed import JsonFileSeedSource, StaticSeedSource
from tide.config import Settings
from tide.domain.service import SeedSource
from tide.util.di.base import ProviderBase


class SeedProvider(ProviderBase):
    """Seed component base."""

    __mock_component__ = "seed"


class ProdSeedProvider(SeedProvider):
    """Production seed provider reading the configured JSON catalog."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_seed_source(self, settings: Settings) -> SeedSource:
        """Provide seed source.

        Returns:
            JSON file source, or an empty static source when no path is set
        """
        if settings.seed.path is None:
            logfire.warn("No seed path configured, starting with an empty catalog")
            return StaticSeedSource()
        return JsonFileSeedSource(settings.seed.path)
