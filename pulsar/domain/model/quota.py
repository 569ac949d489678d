"""Daily vote quota snapshot."""

from datetime import datetime

from pydantic import Field

from pulsar.domain.model.common import DomainModel
from pulsar.domain.value.window import milliseconds_until, next_reset


class VoteQuota(DomainModel):
    """How many votes a user has left in the current local day.

    Three shapes exist:
    - computed: the user's real standing for today
    - guest: caller is not signed in, nothing to spend
    - closed: the lookup failed, nothing to spend
    """

    daily_limit: int = Field(ge=1)
    votes_used: int = Field(default=0, ge=0)
    remaining_votes: int = Field(default=0, ge=0)
    can_vote: bool = False
    time_until_reset: int = Field(default=0, ge=0)  # milliseconds
    reset_time: datetime
    is_guest: bool = False

    @classmethod
    def compute(cls, daily_limit: int, votes_used: int, now: datetime) -> "VoteQuota":
        """Build the quota from today's vote count."""
        remaining = max(0, daily_limit - votes_used)
        reset = next_reset(now)
        return cls(
            daily_limit=daily_limit,
            votes_used=votes_used,
            remaining_votes=remaining,
            can_vote=remaining > 0,
            time_until_reset=milliseconds_until(now, reset),
            reset_time=reset,
        )

    @classmethod
    def guest(cls, daily_limit: int, now: datetime) -> "VoteQuota":
        """Quota for callers without a session."""
        return cls(daily_limit=daily_limit, reset_time=now, is_guest=True)

    @classmethod
    def closed(cls, daily_limit: int, now: datetime) -> "VoteQuota":
        """Zero quota used when the real one cannot be determined."""
        return cls(daily_limit=daily_limit, reset_time=now)
