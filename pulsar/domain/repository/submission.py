"""Submission repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from pulsar.domain.model.submission import Submission
from pulsar.domain.value import SubmissionId


class SubmissionRepository(ABC):
    """Repository for Submission aggregate.

    ``vote_count`` is not written through this repository; it only moves
    together with the vote ledger (see VoteRepository).
    """

    @abstractmethod
    async def find_by_id(self, submission_id: SubmissionId) -> Optional[Submission]:
        """Find a submission by ID.

        Args:
            submission_id: The submission's unique identifier

        Returns:
            The submission if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, submission: Submission) -> Submission:
        """Save a submission (create or update).

        Args:
            submission: The submission to save

        Returns:
            The saved submission
        """
        pass
