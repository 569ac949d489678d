"""Cast vote use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from pulsar.application.usecase.base import BaseUseCase, CamelModel, parse_id
from pulsar.domain.model import VoteQuota
from pulsar.domain.service import UserService, VoteQuotaService, VoteService
from pulsar.domain.value import SubmissionId, UserId, VoteAction


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    submission_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    session_id: str | None = None  # Client session, for tracing only


class CastVoteResponse(CamelModel):
    """Cast vote response."""

    success: bool = True
    action: VoteAction
    vote_count: int
    remaining_votes: int
    daily_limit: int
    votes_used: int
    message: str | None = None


class VoteLimitReachedResponse(CamelModel):
    """Payload returned when the daily quota is used up."""

    error: str = "Daily vote limit reached"
    message: str
    daily_limit: int
    votes_used: int
    remaining_votes: int = 0
    time_until_reset: int
    reset_time: datetime
    limit_reached: bool = True

    @classmethod
    def from_quota(cls, quota: VoteQuota, message: str) -> "VoteLimitReachedResponse":
        return cls(
            message=message,
            daily_limit=quota.daily_limit,
            votes_used=quota.votes_used,
            time_until_reset=quota.time_until_reset,
            reset_time=quota.reset_time,
        )


class CastVoteUseCase(BaseUseCase):
    """Use case for toggling a vote on a submission.

    Voting again on a submission the user already voted on retracts the
    vote and gives the vote back.
    """

    def __init__(
        self,
        vote_service: VoteService,
        quota_service: VoteQuotaService,
        user_service: UserService,
    ) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            quota_service: Vote quota domain service
            user_service: User domain service
        """
        self.vote_service = vote_service
        self.quota_service = quota_service
        self.user_service = user_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            Action taken, new vote count and the caller's quota

        Raises:
            NotFoundError: If user or submission not found
            BusinessRuleViolationError: If the vote is not allowed
            VoteLimitReachedError: If the daily quota is used up
        """
        with logfire.span(
            "cast_vote.execute",
            submission_id=request.submission_id,
            session_id=request.session_id,
        ):
            user = await self.user_service.get_by_id(
                UserId(parse_id(request.user_id, "User"))
            )
            submission_id = SubmissionId(parse_id(request.submission_id, "Submission"))
            await self.vote_service.get_votable_submission(submission_id, user.id)

            existing = await self.vote_service.get_vote(user.id, submission_id)
            if existing:
                retracted = await self.vote_service.retract_vote(
                    user.id, vote_id=existing.id
                )
                quota = await self.quota_service.get_quota(user.id)
                return CastVoteResponse(
                    action=VoteAction.REMOVED,
                    vote_count=retracted.new_vote_count,
                    remaining_votes=quota.remaining_votes,
                    daily_limit=quota.daily_limit,
                    votes_used=quota.votes_used,
                )

            result = await self.vote_service.cast_vote(submission_id, user.id)
            quota = result.quota
            if quota.remaining_votes == 0:
                message = (
                    f"Vote cast! You have used all {quota.daily_limit} votes for today."
                )
            else:
                message = (
                    f"Vote cast! You have {quota.remaining_votes} votes remaining today."
                )

            return CastVoteResponse(
                action=VoteAction.ADDED,
                vote_count=result.vote_count,
                remaining_votes=quota.remaining_votes,
                daily_limit=quota.daily_limit,
                votes_used=quota.votes_used,
                message=message,
            )
