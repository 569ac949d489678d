"""Get vote status use case."""

from pydantic import BaseModel

from pulsar.application.usecase.base import BaseUseCase, CamelModel, parse_id
from pulsar.domain.service import UserService, VoteService
from pulsar.domain.value import SubmissionId, UserId


class GetVoteStatusRequest(BaseModel):
    """Get vote status request."""

    submission_id: str
    user_id: str


class VoteStatusResponse(CamelModel):
    """Whether the caller has voted on a submission."""

    has_voted: bool
    vote_id: str | None = None


class GetVoteStatusUseCase(BaseUseCase):
    """Use case for checking the caller's vote on a submission."""

    def __init__(self, vote_service: VoteService, user_service: UserService) -> None:
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(self, request: GetVoteStatusRequest) -> VoteStatusResponse:
        user = await self.user_service.find_by_id(
            UserId(parse_id(request.user_id, "User"))
        )
        if not user:
            return VoteStatusResponse(has_voted=False)

        vote = await self.vote_service.get_vote(
            user.id, SubmissionId(parse_id(request.submission_id, "Submission"))
        )
        return VoteStatusResponse(
            has_voted=vote is not None,
            vote_id=str(vote.id) if vote else None,
        )
