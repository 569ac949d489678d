"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from pulsar.domain.model.history import VoteHistoryEntry
from pulsar.domain.model.vote import Vote
from pulsar.domain.value import SubmissionId, TimeWindow, UserId, VoteId


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.

    The write methods change the vote ledger and the submission's cached
    vote_count as one atomic unit: both happen or neither does.
    """

    @abstractmethod
    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID.

        Args:
            vote_id: The vote's unique identifier

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id_and_user(
        self, vote_id: VoteId, user_id: UserId
    ) -> Optional[Vote]:
        """Find a vote by ID, only if it belongs to the user.

        Args:
            vote_id: The vote's unique identifier
            user_id: The owner the vote must belong to

        Returns:
            The vote if found and owned by the user, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_submission(
        self, user_id: UserId, submission_id: SubmissionId
    ) -> Optional[Vote]:
        """Find a user's vote on a specific submission.

        Args:
            user_id: The user's ID
            submission_id: The submission's ID

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def count_by_user(self, user_id: UserId, window: TimeWindow) -> int:
        """Count a user's votes created inside a time window.

        Args:
            user_id: The user's ID
            window: Inclusive creation-time window

        Returns:
            Number of votes
        """
        pass

    @abstractmethod
    async def find_history(
        self,
        user_id: UserId,
        window: TimeWindow,
        limit: int = 20,
        offset: int = 0,
    ) -> List[VoteHistoryEntry]:
        """Find a user's votes with their submissions, newest first.

        Args:
            user_id: The user's ID
            window: Inclusive creation-time window
            limit: Maximum number of entries
            offset: Number of entries to skip

        Returns:
            Vote history entries ordered by created_at descending
        """
        pass

    @abstractmethod
    async def add(self, vote: Vote) -> int:
        """Insert a vote and increment the submission's vote_count.

        Args:
            vote: The vote to insert

        Returns:
            The submission's vote_count after the increment

        Raises:
            IntegrityError: If the user already voted on the submission
        """
        pass

    @abstractmethod
    async def retract(self, vote: Vote) -> Optional[int]:
        """Delete a vote and decrement the submission's vote_count.

        The delete only matches a row with the vote's ID and owner. If no
        row matched (already retracted), nothing is decremented.

        Args:
            vote: The vote to delete

        Returns:
            The submission's vote_count after the decrement, or None if no
            vote was deleted
        """
        pass
