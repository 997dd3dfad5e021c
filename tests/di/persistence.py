"""In-memory repositories that yield to the event loop after every read.

Used to interleave concurrent commands, which plain in-memory repositories
never do because they complete without suspending. A caller resumed after
the yield may hold a record another coroutine has since replaced.
"""

import asyncio
from typing import Optional

from tide.domain.model import Trueque, User
from tide.domain.value import TruequeId, UserId
from tide.persistence.repository import (
    InMemoryTruequeRepository,
    InMemoryUserRepository,
)


class YieldingTruequeRepository(InMemoryTruequeRepository):
    """Trueque repository that suspends between reading and returning."""

    async def find_by_id(self, trueque_id: TruequeId) -> Optional[Trueque]:
        trueque = await super().find_by_id(trueque_id)
        await asyncio.sleep(0)
        return trueque


class YieldingUserRepository(InMemoryUserRepository):
    """User repository that suspends between reading and returning."""

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        user = await super().find_by_id(user_id)
        await asyncio.sleep(0)
        return user
