"""Infrastructure providers."""

# Import bases
from .persistence import PersistenceProvider
from .seed import SeedProvider

# Import implementations (needed for __subclasses__())
from .seed import ProdSeedProvider  # noqa: F401

__all__ = [
    "PersistenceProvider",
    "ProdSeedProvider",
    "SeedProvider",
]
