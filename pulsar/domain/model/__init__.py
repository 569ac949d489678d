"""Domain model entities for Pulsar Playgrounds."""

from pulsar.domain.model.history import VoteHistoryEntry, VoteHistoryPage
from pulsar.domain.model.quota import VoteQuota
from pulsar.domain.model.submission import Submission
from pulsar.domain.model.user import User
from pulsar.domain.model.vote import Vote

__all__ = [
    "User",
    "Submission",
    "Vote",
    "VoteQuota",
    "VoteHistoryEntry",
    "VoteHistoryPage",
]
