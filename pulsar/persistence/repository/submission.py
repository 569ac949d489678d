"""PostgreSQL implementation of Submission repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from pulsar.domain.model import Submission
from pulsar.domain.repository import SubmissionRepository
from pulsar.domain.value import SubmissionId
from pulsar.persistence.mappers import row_to_submission, submission_to_dict
from pulsar.persistence.tables import submissions_table


class PostgresSubmissionRepository(SubmissionRepository):
    """PostgreSQL implementation of SubmissionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, submission_id: SubmissionId) -> Optional[Submission]:
        """Find a submission by ID."""
        stmt = select(submissions_table).where(submissions_table.c.id == submission_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_submission(dict(row)) if row else None

    async def save(self, submission: Submission) -> Submission:
        """Save a submission (create or update).

        Updates never touch vote_count; the vote ledger owns it.
        """
        values = submission_to_dict(submission)
        stmt = insert(submissions_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[submissions_table.c.id],
            set_={
                key: stmt.excluded[key]
                for key in values
                if key not in ("id", "vote_count", "created_at")
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return submission
