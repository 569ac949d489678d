"""Test configuration and fixtures."""

from datetime import datetime
from uuid import uuid4
from zoneinfo import ZoneInfo

import logfire

from pulsar.domain.model import Submission, User, Vote
from pulsar.domain.value import (
    SubmissionId,
    SubmissionStatus,
    SubmissionType,
    UserId,
    VoteId,
)

# Keep test output quiet and local
logfire.configure(send_to_logfire=False, console=False)

KOLKATA = ZoneInfo("Asia/Kolkata")


def local_time(*args: int) -> datetime:
    """Aware datetime in a fixed voting timezone."""
    return datetime(*args, tzinfo=KOLKATA)


def make_user(name: str = "Asha", email: str | None = None) -> User:
    """Build a user with a fresh ID."""
    return User(
        id=UserId(uuid4()),
        name=name,
        email=email or f"{name.lower()}.{uuid4().hex[:8]}@example.com",
    )


def make_submission(
    creator: User,
    title: str = "Neon Tides",
    status: SubmissionStatus = SubmissionStatus.APPROVED,
    vote_count: int = 0,
) -> Submission:
    """Build a submission owned by ``creator``."""
    return Submission(
        id=SubmissionId(uuid4()),
        user_id=creator.id,
        type=SubmissionType.AI_ARTWORK,
        title=title,
        caption="Made for the weekly challenge",
        content_url=f"https://cdn.pulsarplaygrounds.com/{uuid4()}.png",
        status=status,
        vote_count=vote_count,
    )


def make_vote(user: User, submission: Submission, created_at: datetime) -> Vote:
    """Build a vote cast at ``created_at``."""
    return Vote(
        id=VoteId(uuid4()),
        user_id=user.id,
        submission_id=submission.id,
        created_at=created_at,
    )
