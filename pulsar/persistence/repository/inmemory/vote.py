"""In-memory vote repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from pulsar.domain.model import Vote, VoteHistoryEntry
from pulsar.domain.repository.vote import VoteRepository
from pulsar.domain.value import SubmissionId, TimeWindow, UserId, VoteId

from .store import InMemoryStore


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Each write checks everything before mutating anything, so the vote and
    the submission counter change together.
    """

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    def _user_votes(self, user_id: UserId, window: TimeWindow) -> list[Vote]:
        return [
            v
            for v in self._store.votes.values()
            if v.user_id == user_id and window.contains(v.created_at)
        ]

    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID."""
        return self._store.votes.get(vote_id)

    async def find_by_id_and_user(
        self, vote_id: VoteId, user_id: UserId
    ) -> Optional[Vote]:
        """Find a vote by ID, only if it belongs to the user."""
        vote = self._store.votes.get(vote_id)
        if vote and vote.user_id == user_id:
            return vote
        return None

    async def find_by_user_and_submission(
        self, user_id: UserId, submission_id: SubmissionId
    ) -> Optional[Vote]:
        """Find a user's vote on a specific submission."""
        for vote in self._store.votes.values():
            if vote.user_id == user_id and vote.submission_id == submission_id:
                return vote
        return None

    async def count_by_user(self, user_id: UserId, window: TimeWindow) -> int:
        """Count a user's votes created inside a time window."""
        return len(self._user_votes(user_id, window))

    async def find_history(
        self,
        user_id: UserId,
        window: TimeWindow,
        limit: int = 20,
        offset: int = 0,
    ) -> list[VoteHistoryEntry]:
        """Find a user's votes with their submissions, newest first."""
        votes = sorted(
            self._user_votes(user_id, window),
            key=lambda v: v.created_at,
            reverse=True,
        )
        entries = []
        for vote in votes[offset : offset + limit]:
            submission = self._store.submissions[vote.submission_id]
            entries.append(
                VoteHistoryEntry(
                    vote=vote,
                    submission=submission,
                    creator=self._store.users.get(submission.user_id),
                )
            )
        return entries

    async def add(self, vote: Vote) -> int:
        """Insert a vote and increment the submission's vote_count.

        Raises:
            IntegrityError: If the vote is a duplicate or the submission
                does not exist
        """
        submission = self._store.submissions.get(vote.submission_id)
        if submission is None:
            raise IntegrityError("Unknown submission", None, Exception())
        if await self.find_by_user_and_submission(vote.user_id, vote.submission_id):
            raise IntegrityError("Duplicate vote", None, Exception())

        self._store.votes[vote.id] = vote
        self._store.submissions[submission.id] = submission.model_copy(
            update={"vote_count": submission.vote_count + 1}
        )
        return submission.vote_count + 1

    async def retract(self, vote: Vote) -> Optional[int]:
        """Delete a vote and decrement the submission's vote_count."""
        stored = self._store.votes.get(vote.id)
        if stored is None or stored.user_id != vote.user_id:
            return None

        submission = self._store.submissions[stored.submission_id]
        del self._store.votes[vote.id]
        self._store.submissions[submission.id] = submission.model_copy(
            update={"vote_count": submission.vote_count - 1}
        )
        return submission.vote_count - 1
