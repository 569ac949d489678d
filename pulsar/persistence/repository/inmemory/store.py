"""Shared state behind the in-memory repositories.

Votes change submission counters, so the vote and submission repositories
must see the same data.
"""

from dataclasses import dataclass, field

from pulsar.domain.model import Submission, User, Vote
from pulsar.domain.value import SubmissionId, UserId, VoteId


@dataclass
class InMemoryStore:
    """In-memory tables keyed by ID."""

    users: dict[UserId, User] = field(default_factory=dict)
    submissions: dict[SubmissionId, Submission] = field(default_factory=dict)
    votes: dict[VoteId, Vote] = field(default_factory=dict)
