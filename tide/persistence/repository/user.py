"""In-memory user repository."""

from typing import Optional, Sequence

from tide.domain.model.user import User
from tide.domain.repository.user import UserRepository
from tide.domain.value import UserId
from tide.persistence.store import EngineStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository."""

    def __init__(self, store: EngineStore) -> None:
        self._store = store

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._store.users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find users by ID, keeping the requested order."""
        users = self._store.users
        return [users[user_id] for user_id in user_ids if user_id in users]

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._store.users[user.id] = user
        return user
