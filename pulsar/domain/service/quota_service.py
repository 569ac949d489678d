"""Vote quota domain service."""

from datetime import datetime

import logfire

from pulsar.config import VotingSettings
from pulsar.domain.model import VoteQuota
from pulsar.domain.repository import VoteRepository
from pulsar.domain.value import UserId
from pulsar.domain.value.window import day_window, local_now, resolve_timezone

from .base import Service


class VoteQuotaService(Service):
    """Domain service answering "how many votes are left today?".

    The day is the local calendar day in the configured voting timezone.
    """

    def __init__(
        self, vote_repository: VoteRepository, voting_settings: VotingSettings
    ) -> None:
        """Initialize vote quota service.

        Args:
            vote_repository: Vote repository
            voting_settings: Voting configuration (daily limit, timezone)
        """
        self.vote_repository = vote_repository
        self.voting_settings = voting_settings
        self.timezone = resolve_timezone(voting_settings.timezone)

    @property
    def daily_limit(self) -> int:
        return self.voting_settings.daily_vote_limit

    def now(self) -> datetime:
        """Current time in the voting timezone."""
        return local_now(self.timezone)

    async def get_quota(
        self, user_id: UserId, now: datetime | None = None
    ) -> VoteQuota:
        """Compute a user's quota for the day containing ``now``.

        Args:
            user_id: User ID
            now: Reference time (defaults to the current local time)

        Returns:
            Quota with votes used, remaining votes and reset countdown
        """
        now = now or self.now()
        with logfire.span("vote_quota_service.get_quota", user_id=str(user_id)):
            votes_used = await self.vote_repository.count_by_user(
                user_id, day_window(now)
            )
            quota = VoteQuota.compute(self.daily_limit, votes_used, now)
            logfire.info(
                "Vote quota computed",
                user_id=str(user_id),
                votes_used=quota.votes_used,
                remaining_votes=quota.remaining_votes,
            )
            return quota

    def guest_quota(self, now: datetime | None = None) -> VoteQuota:
        """Quota for callers without a session."""
        return VoteQuota.guest(self.daily_limit, now or self.now())

    def closed_quota(self, now: datetime | None = None) -> VoteQuota:
        """Zero quota for when the real one cannot be determined."""
        return VoteQuota.closed(self.daily_limit, now or self.now())
