"""Domain value objects for Pulsar Playgrounds."""

from pulsar.domain.value.identifiers import (
    ChallengeId,
    SubmissionId,
    UserId,
    VoteId,
)
from pulsar.domain.value.types import (
    SubmissionStatus,
    SubmissionType,
    TimeRange,
    VoteAction,
)
from pulsar.domain.value.window import TimeWindow

__all__ = [
    # Identifiers
    "UserId",
    "SubmissionId",
    "VoteId",
    "ChallengeId",
    # Types
    "SubmissionStatus",
    "SubmissionType",
    "TimeRange",
    "VoteAction",
    "TimeWindow",
]
