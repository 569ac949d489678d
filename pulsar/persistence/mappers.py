"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from pulsar.domain.model import Submission, User, Vote
from pulsar.domain.value import (
    ChallengeId,
    SubmissionId,
    SubmissionStatus,
    SubmissionType,
    UserId,
    VoteId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        name=row.get("name") or "",
        email=row.get("email"),
        mobile=row.get("mobile"),
        image=row.get("image"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_submission(row: Dict[str, Any]) -> Submission:
    """Convert database row to Submission domain model.

    Args:
        row: Database row as dict

    Returns:
        Submission domain model
    """
    return Submission(
        id=SubmissionId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        challenge_id=ChallengeId(_uuid(row["challenge_id"]))
        if row.get("challenge_id")
        else None,
        type=SubmissionType(row["type"]),
        title=row["title"],
        caption=row.get("caption"),
        content_url=row["content_url"],
        status=SubmissionStatus(row["status"]),
        vote_count=row["vote_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def submission_to_dict(submission: Submission) -> Dict[str, Any]:
    """Convert Submission domain model to database dict."""
    data = submission.model_dump()
    data["type"] = submission.type.value
    data["status"] = submission.status.value
    return data


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        submission_id=SubmissionId(_uuid(row["submission_id"])),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return vote.model_dump()
