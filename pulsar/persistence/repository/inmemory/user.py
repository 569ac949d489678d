"""In-memory user repository for testing."""

from typing import Optional

from pulsar.domain.model.user import User
from pulsar.domain.repository.user import UserRepository
from pulsar.domain.value import UserId

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._store.users.get(user_id)

    async def save(self, user: User) -> User:
        """Save a user."""
        self._store.users[user.id] = user
        return user
