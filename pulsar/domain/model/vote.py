"""Vote entity.

A vote joins a user and a submission. Each user can cast one vote per
submission; retracting deletes the row.
"""

from datetime import datetime

from pydantic import Field

from pulsar.domain.model.common import DomainModel
from pulsar.domain.value import SubmissionId, UserId, VoteId


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per submission (enforced by database unique constraint)
    - Creating or deleting a vote moves the submission's vote_count by one
    """

    id: VoteId
    user_id: UserId
    submission_id: SubmissionId
    created_at: datetime = Field(
        default_factory=lambda: datetime.now().astimezone()
    )
