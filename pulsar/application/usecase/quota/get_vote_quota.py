"""Get vote quota use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from pulsar.application.usecase.base import BaseUseCase, CamelModel, parse_id
from pulsar.domain.model import VoteQuota
from pulsar.domain.service import UserService, VoteQuotaService
from pulsar.domain.value import UserId


class GetVoteQuotaRequest(BaseModel):
    """Get vote quota request."""

    user_id: str | None = None  # None for callers without a session


class QuotaUserInfo(CamelModel):
    """Signed-in user shown next to the quota."""

    id: str
    email: str | None
    name: str


class VoteQuotaResponse(CamelModel):
    """Vote quota response."""

    success: bool = True
    daily_limit: int
    votes_used: int
    remaining_votes: int
    can_vote: bool
    time_until_reset: int  # milliseconds until the next local midnight
    reset_time: datetime
    is_guest: bool
    message: str | None = None
    error: str | None = None
    user: QuotaUserInfo | None = None

    @classmethod
    def from_quota(cls, quota: VoteQuota, **extra) -> "VoteQuotaResponse":
        return cls(
            daily_limit=quota.daily_limit,
            votes_used=quota.votes_used,
            remaining_votes=quota.remaining_votes,
            can_vote=quota.can_vote,
            time_until_reset=quota.time_until_reset,
            reset_time=quota.reset_time,
            is_guest=quota.is_guest,
            **extra,
        )


class GetVoteQuotaUseCase(BaseUseCase):
    """Use case for reporting a caller's remaining votes today."""

    def __init__(
        self, quota_service: VoteQuotaService, user_service: UserService
    ) -> None:
        """Initialize get vote quota use case.

        Args:
            quota_service: Vote quota domain service
            user_service: User domain service
        """
        self.quota_service = quota_service
        self.user_service = user_service

    async def execute(self, request: GetVoteQuotaRequest) -> VoteQuotaResponse:
        """Execute get vote quota flow.

        Guests get an empty quota rather than an error.

        Args:
            request: Request with the caller's user ID, if signed in

        Returns:
            Quota for today

        Raises:
            NotFoundError: If the signed-in user no longer exists
        """
        if request.user_id is None:
            logfire.debug("Vote quota requested by guest")
            return VoteQuotaResponse.from_quota(
                self.quota_service.guest_quota(), message="Sign in to start voting"
            )

        user = await self.user_service.get_by_id(
            UserId(parse_id(request.user_id, "User"))
        )
        quota = await self.quota_service.get_quota(user.id)

        return VoteQuotaResponse.from_quota(
            quota,
            user=QuotaUserInfo(id=str(user.id), email=user.email, name=user.name),
        )

    def closed(self, error: str) -> VoteQuotaResponse:
        """Zero-quota response for failed lookups.

        Args:
            error: Error message for the client

        Returns:
            Response that never allows voting
        """
        return VoteQuotaResponse.from_quota(
            self.quota_service.closed_quota(), success=False, error=error
        )
