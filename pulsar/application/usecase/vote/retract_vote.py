"""Retract vote use case."""

from pydantic import BaseModel

from pulsar.application.usecase.base import BaseUseCase, CamelModel, parse_id
from pulsar.domain.service import UserService, VoteService
from pulsar.domain.value import SubmissionId, UserId, VoteId


class RetractVoteRequest(BaseModel):
    """Retract vote request.

    At least one of vote_id and submission_id must be set.
    """

    user_id: str  # User ID from authenticated user
    vote_id: str | None = None
    submission_id: str | None = None


class RetractVoteResponse(CamelModel):
    """Retract vote response."""

    success: bool
    message: str
    submission_id: str
    new_vote_count: int


class RetractVoteUseCase(BaseUseCase):
    """Use case for retracting one of the caller's votes."""

    def __init__(self, vote_service: VoteService, user_service: UserService) -> None:
        """Initialize retract vote use case.

        Args:
            vote_service: Vote domain service
            user_service: User domain service
        """
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(self, request: RetractVoteRequest) -> RetractVoteResponse:
        """Execute retract vote flow.

        Args:
            request: Retract vote request

        Returns:
            Affected submission and its new vote count

        Raises:
            ValidationError: If neither identifier is given
            NotFoundError: If the user or the user's vote is not found
        """
        user = await self.user_service.get_by_id(
            UserId(parse_id(request.user_id, "User"))
        )

        result = await self.vote_service.retract_vote(
            user.id,
            vote_id=VoteId(parse_id(request.vote_id, "Vote"))
            if request.vote_id
            else None,
            submission_id=SubmissionId(parse_id(request.submission_id, "Vote"))
            if request.submission_id
            else None,
        )

        return RetractVoteResponse(
            success=True,
            message="Vote removed successfully",
            submission_id=str(result.vote.submission_id),
            new_vote_count=result.new_vote_count,
        )
