"""PostgreSQL repository implementations."""

from pulsar.persistence.repository.submission import PostgresSubmissionRepository
from pulsar.persistence.repository.user import PostgresUserRepository
from pulsar.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresSubmissionRepository",
    "PostgresVoteRepository",
]
