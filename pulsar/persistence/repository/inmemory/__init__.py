"""In-memory repository implementations for testing."""

from .store import InMemoryStore
from .submission import InMemorySubmissionRepository
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryStore",
    "InMemorySubmissionRepository",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
