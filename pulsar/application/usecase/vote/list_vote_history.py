"""List vote history use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from pulsar.application.usecase.base import BaseUseCase, CamelModel, parse_id
from pulsar.config import VotingSettings
from pulsar.domain.model import VoteHistoryEntry
from pulsar.domain.service import UserService, VoteService
from pulsar.domain.value import SubmissionType, TimeRange, UserId


class ListVoteHistoryRequest(BaseModel):
    """List vote history request."""

    user_id: str
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)  # None for the default size
    time_range: TimeRange = TimeRange.TODAY


class CreatorInfo(CamelModel):
    """Creator of a voted submission."""

    id: str
    name: str
    image: str | None


class VotedSubmission(CamelModel):
    """Submission as it is now, shown in the history."""

    id: str
    title: str
    type: SubmissionType
    content_url: str
    caption: str | None
    vote_count: int
    creator: CreatorInfo | None


class VoteHistoryItem(CamelModel):
    """One past vote."""

    id: str
    voted_at: datetime
    submission: VotedSubmission
    can_change_vote: bool = True


class PaginationInfo(CamelModel):
    """Pagination metadata."""

    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool


class HistorySummary(CamelModel):
    """Vote totals for the selected range."""

    total_votes: int
    today_votes: int | None


class ListVoteHistoryResponse(CamelModel):
    """List vote history response."""

    success: bool = True
    votes: list[VoteHistoryItem]
    pagination: PaginationInfo
    time_range: TimeRange
    summary: HistorySummary


def _to_item(entry: VoteHistoryEntry) -> VoteHistoryItem:
    submission = entry.submission
    creator = entry.creator
    return VoteHistoryItem(
        id=str(entry.vote.id),
        voted_at=entry.voted_at,
        submission=VotedSubmission(
            id=str(submission.id),
            title=submission.title,
            type=submission.type,
            content_url=submission.content_url,
            caption=submission.caption,
            vote_count=submission.vote_count,
            creator=CreatorInfo(
                id=str(creator.id), name=creator.name, image=creator.image
            )
            if creator
            else None,
        ),
    )


class ListVoteHistoryUseCase(BaseUseCase):
    """Use case for paging through the caller's vote history."""

    def __init__(
        self,
        vote_service: VoteService,
        user_service: UserService,
        voting_settings: VotingSettings,
    ) -> None:
        """Initialize list vote history use case.

        Args:
            vote_service: Vote domain service
            user_service: User domain service
            voting_settings: Voting configuration (page sizes)
        """
        self.vote_service = vote_service
        self.user_service = user_service
        self.voting_settings = voting_settings

    async def execute(self, request: ListVoteHistoryRequest) -> ListVoteHistoryResponse:
        """Execute list vote history flow.

        Page size defaults to the configured size and is capped at the
        configured maximum.

        Args:
            request: List vote history request

        Returns:
            One page of the caller's votes, newest first

        Raises:
            NotFoundError: If the user is not found
        """
        limit = min(
            request.limit or self.voting_settings.default_history_page_size,
            self.voting_settings.max_history_page_size,
        )

        with logfire.span(
            "list_vote_history.execute",
            page=request.page,
            limit=limit,
            time_range=request.time_range.value,
        ):
            user = await self.user_service.get_by_id(
                UserId(parse_id(request.user_id, "User"))
            )
            history = await self.vote_service.list_history(
                user.id,
                time_range=request.time_range,
                page=request.page,
                limit=limit,
            )

            return ListVoteHistoryResponse(
                votes=[_to_item(entry) for entry in history.entries],
                pagination=PaginationInfo(
                    page=history.page,
                    limit=history.limit,
                    total=history.total,
                    total_pages=history.total_pages,
                    has_more=history.has_more,
                ),
                time_range=request.time_range,
                summary=HistorySummary(
                    total_votes=history.total,
                    today_votes=history.total
                    if request.time_range == TimeRange.TODAY
                    else None,
                ),
            )
