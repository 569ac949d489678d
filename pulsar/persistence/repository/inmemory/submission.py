"""In-memory submission repository for testing."""

from typing import Optional

from pulsar.domain.model.submission import Submission
from pulsar.domain.repository.submission import SubmissionRepository
from pulsar.domain.value import SubmissionId

from .store import InMemoryStore


class InMemorySubmissionRepository(SubmissionRepository):
    """In-memory implementation of SubmissionRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, submission_id: SubmissionId) -> Optional[Submission]:
        """Find a submission by ID."""
        return self._store.submissions.get(submission_id)

    async def save(self, submission: Submission) -> Submission:
        """Save a submission, keeping the stored vote_count on updates."""
        existing = self._store.submissions.get(submission.id)
        if existing:
            submission = submission.model_copy(
                update={"vote_count": existing.vote_count}
            )
        self._store.submissions[submission.id] = submission
        return submission
