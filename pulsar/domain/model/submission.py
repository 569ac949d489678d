"""Submission aggregate root.

Submissions are the contest entries users vote on.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pulsar.domain.model.common import DomainModel
from pulsar.domain.value import (
    ChallengeId,
    SubmissionId,
    SubmissionStatus,
    SubmissionType,
    UserId,
)


class Submission(DomainModel):
    """Submission aggregate root.

    ``vote_count`` caches the number of votes referencing the submission.
    It is only changed together with the vote ledger, in the same
    transaction.
    """

    id: SubmissionId
    user_id: UserId
    challenge_id: Optional[ChallengeId] = None
    type: SubmissionType
    title: str = Field(min_length=1, max_length=300)
    caption: Optional[str] = None
    content_url: str
    status: SubmissionStatus = SubmissionStatus.PENDING
    vote_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_open_for_voting(self) -> bool:
        """Only approved submissions accept votes."""
        return self.status == SubmissionStatus.APPROVED
