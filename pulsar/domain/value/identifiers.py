"""Strongly typed identifiers for Pulsar Playgrounds domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
SubmissionId = NewType("SubmissionId", UUID)
VoteId = NewType("VoteId", UUID)
ChallengeId = NewType("ChallengeId", UUID)
