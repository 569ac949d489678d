"""Domain value objects for Pulsar Playgrounds.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum


class SubmissionType(str, Enum):
    """Kind of content a submission carries."""

    AI_ARTWORK = "AI_ARTWORK"
    AI_SONG = "AI_SONG"
    AI_VIDEO = "AI_VIDEO"
    UPLOAD_ARTWORK = "UPLOAD_ARTWORK"
    UPLOAD_VIDEO = "UPLOAD_VIDEO"


class SubmissionStatus(str, Enum):
    """Moderation status of a submission.

    Only approved submissions are open for voting.
    """

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class TimeRange(str, Enum):
    """Vote history time window selector."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"

    @classmethod
    def parse(cls, value: str | None) -> "TimeRange":
        """Parse a selector; anything unrecognized means no time bound."""
        try:
            return cls(value or cls.TODAY)
        except ValueError:
            return cls.ALL


class VoteAction(str, Enum):
    """Outcome of a cast/toggle request."""

    ADDED = "added"
    REMOVED = "removed"
