"""Vote history read models."""

from datetime import datetime
from typing import Optional

from pulsar.domain.model.common import DomainModel
from pulsar.domain.model.submission import Submission
from pulsar.domain.model.user import User
from pulsar.domain.model.vote import Vote


class VoteHistoryEntry(DomainModel):
    """A past vote together with the submission as it is now."""

    vote: Vote
    submission: Submission
    creator: Optional[User] = None

    @property
    def voted_at(self) -> datetime:
        return self.vote.created_at


class VoteHistoryPage(DomainModel):
    """One page of a user's vote history."""

    entries: list[VoteHistoryEntry]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.limit)

    @property
    def has_more(self) -> bool:
        return self.page * self.limit < self.total
