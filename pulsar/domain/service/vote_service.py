"""Vote domain service."""

from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from pulsar.domain.error import (
    BusinessRuleViolationError,
    DuplicateVoteError,
    NotFoundError,
    ValidationError,
    VoteLimitReachedError,
)
from pulsar.domain.model import Submission, Vote, VoteHistoryPage, VoteQuota
from pulsar.domain.repository import VoteRepository
from pulsar.domain.value import SubmissionId, TimeRange, UserId, VoteId
from pulsar.domain.value.window import history_window

from .base import Service
from .quota_service import VoteQuotaService
from .submission_service import SubmissionService


@dataclass
class CastResult:
    """Outcome of casting a vote."""

    vote: Vote
    vote_count: int
    quota: VoteQuota


@dataclass
class RetractResult:
    """Outcome of retracting a vote."""

    vote: Vote
    new_vote_count: int


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        submission_service: SubmissionService,
        quota_service: VoteQuotaService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            submission_service: Submission domain service
            quota_service: Vote quota domain service
        """
        self.vote_repository = vote_repository
        self.submission_service = submission_service
        self.quota_service = quota_service

    async def get_votable_submission(
        self, submission_id: SubmissionId, user_id: UserId
    ) -> Submission:
        """Get a submission the user may vote on, or take a vote back from.

        Args:
            submission_id: Submission ID
            user_id: Voter's user ID

        Returns:
            The submission

        Raises:
            NotFoundError: If the submission does not exist
            BusinessRuleViolationError: If the submission is not approved or
                belongs to the voter
        """
        submission = await self.submission_service.get_submission_by_id(submission_id)
        if not submission:
            raise NotFoundError("Submission", str(submission_id))

        if not submission.is_open_for_voting:
            logfire.warn(
                "Vote on submission not open for voting",
                submission_id=str(submission_id),
                status=submission.status.value,
            )
            raise BusinessRuleViolationError("Submission not available for voting")

        if submission.user_id == user_id:
            logfire.warn(
                "Self vote attempt",
                submission_id=str(submission_id),
                user_id=str(user_id),
            )
            raise BusinessRuleViolationError("Cannot vote for your own submission")

        return submission

    async def cast_vote(
        self,
        submission_id: SubmissionId,
        user_id: UserId,
        now: datetime | None = None,
    ) -> CastResult:
        """Cast a vote on a submission.

        Creates the vote record and increments the submission's vote_count
        in one unit, after checking the daily quota.

        Args:
            submission_id: Submission ID
            user_id: User ID
            now: Reference time (defaults to the current local time)

        Returns:
            Created vote, new vote count and the quota after the vote

        Raises:
            NotFoundError: If the submission does not exist
            BusinessRuleViolationError: If the submission is not approved or
                belongs to the voter
            DuplicateVoteError: If the user already voted on the submission
            VoteLimitReachedError: If the daily quota is used up
        """
        now = now or self.quota_service.now()
        with logfire.span(
            "cast_vote", submission_id=str(submission_id), user_id=str(user_id)
        ):
            await self.get_votable_submission(submission_id, user_id)

            existing = await self.vote_repository.find_by_user_and_submission(
                user_id, submission_id
            )
            if existing:
                raise DuplicateVoteError(str(submission_id))

            quota = await self.quota_service.get_quota(user_id, now)
            if not quota.can_vote:
                logfire.warn(
                    "Daily vote limit reached",
                    user_id=str(user_id),
                    votes_used=quota.votes_used,
                )
                raise VoteLimitReachedError(quota)

            vote = Vote(
                id=VoteId(uuid4()),
                user_id=user_id,
                submission_id=submission_id,
                created_at=now,
            )

            try:
                vote_count = await self.vote_repository.add(vote)
            except IntegrityError:
                logfire.warn(
                    "Duplicate vote attempt",
                    user_id=str(user_id),
                    submission_id=str(submission_id),
                )
                raise DuplicateVoteError(str(submission_id))

            logfire.info(
                "Vote cast",
                vote_id=str(vote.id),
                submission_id=str(submission_id),
                vote_count=vote_count,
            )

            return CastResult(
                vote=vote,
                vote_count=vote_count,
                quota=VoteQuota.compute(
                    quota.daily_limit, quota.votes_used + 1, now
                ),
            )

    async def retract_vote(
        self,
        user_id: UserId,
        vote_id: VoteId | None = None,
        submission_id: SubmissionId | None = None,
    ) -> RetractResult:
        """Retract one of the user's votes.

        The vote is looked up by ID, or by the submission it was cast on.
        Either way it must belong to the user. The vote row is deleted and
        the submission's vote_count decremented as one unit.

        Args:
            user_id: User ID
            vote_id: Vote ID (takes precedence when both are given)
            submission_id: Submission ID

        Returns:
            Retracted vote and the submission's new vote count

        Raises:
            ValidationError: If neither identifier is given
            NotFoundError: If the user has no such vote
        """
        with logfire.span(
            "retract_vote",
            user_id=str(user_id),
            vote_id=str(vote_id) if vote_id else None,
            submission_id=str(submission_id) if submission_id else None,
        ):
            if vote_id is not None:
                vote = await self.vote_repository.find_by_id_and_user(vote_id, user_id)
                identifier = str(vote_id)
            elif submission_id is not None:
                vote = await self.vote_repository.find_by_user_and_submission(
                    user_id, submission_id
                )
                identifier = str(submission_id)
            else:
                raise ValidationError("Vote ID or Submission ID required")

            if not vote:
                logfire.info(
                    "No vote to retract", user_id=str(user_id), identifier=identifier
                )
                raise NotFoundError("Vote", identifier)

            new_vote_count = await self.vote_repository.retract(vote)
            if new_vote_count is None:
                # Another request retracted it between lookup and delete
                logfire.warn(
                    "Vote already retracted", vote_id=str(vote.id), user_id=str(user_id)
                )
                raise NotFoundError("Vote", identifier)

            logfire.info(
                "Vote retracted",
                vote_id=str(vote.id),
                submission_id=str(vote.submission_id),
                new_vote_count=new_vote_count,
            )

            return RetractResult(vote=vote, new_vote_count=new_vote_count)

    async def get_vote(
        self, user_id: UserId, submission_id: SubmissionId
    ) -> Vote | None:
        """Get the user's vote on a submission, if any."""
        return await self.vote_repository.find_by_user_and_submission(
            user_id, submission_id
        )

    async def list_history(
        self,
        user_id: UserId,
        time_range: TimeRange = TimeRange.TODAY,
        page: int = 1,
        limit: int = 20,
        now: datetime | None = None,
    ) -> VoteHistoryPage:
        """List a user's votes, newest first.

        Args:
            user_id: User ID
            time_range: today, week, month or all
            page: 1-based page number
            limit: Page size
            now: Reference time (defaults to the current local time)

        Returns:
            One page of vote history with the total count
        """
        if page < 1:
            raise ValidationError("Page must be at least 1")
        if limit < 1:
            raise ValidationError("Limit must be at least 1")

        now = now or self.quota_service.now()
        with logfire.span(
            "list_vote_history",
            user_id=str(user_id),
            time_range=time_range.value,
            page=page,
            limit=limit,
        ):
            window = history_window(time_range, now)
            total = await self.vote_repository.count_by_user(user_id, window)
            entries = await self.vote_repository.find_history(
                user_id, window, limit=limit, offset=(page - 1) * limit
            )

            logfire.info("Vote history listed", count=len(entries), total=total)

            return VoteHistoryPage(entries=entries, page=page, limit=limit, total=total)
