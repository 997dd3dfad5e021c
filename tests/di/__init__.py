"""Mock providers for testing."""

from .seed import SEED_DATA, MockSeedProvider, make_seed_document
from .persistence import YieldingTruequeRepository, YieldingUserRepository
from .container import build_test_container

__all__ = [
    "SEED_DATA",
    "MockSeedProvider",
    "YieldingTruequeRepository",
    "YieldingUserRepository",
    "make_seed_document",
    "build_test_container",
]
