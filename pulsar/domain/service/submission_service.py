"""Submission domain service."""

import logfire

from pulsar.domain.model import Submission
from pulsar.domain.repository import SubmissionRepository
from pulsar.domain.value import SubmissionId

from .base import Service


class SubmissionService(Service):
    """Domain service for submission lookups."""

    def __init__(self, submission_repository: SubmissionRepository) -> None:
        """Initialize submission service.

        Args:
            submission_repository: Submission repository
        """
        self.submission_repository = submission_repository

    async def get_submission_by_id(
        self, submission_id: SubmissionId
    ) -> Submission | None:
        """Get a submission by ID.

        Args:
            submission_id: Submission ID

        Returns:
            Submission if found, None otherwise
        """
        with logfire.span(
            "submission_service.get_submission_by_id",
            submission_id=str(submission_id),
        ):
            submission = await self.submission_repository.find_by_id(submission_id)
            if not submission:
                logfire.warn("Submission not found", submission_id=str(submission_id))
            return submission
