"""Repository interfaces for Pulsar Playgrounds domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from pulsar.domain.repository.submission import SubmissionRepository
from pulsar.domain.repository.user import UserRepository
from pulsar.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "SubmissionRepository",
    "VoteRepository",
]
