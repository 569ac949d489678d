"""PostgreSQL implementation of Vote repository."""

from typing import Any, Dict, List, Optional

import logfire
from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pulsar.domain.model import Vote, VoteHistoryEntry
from pulsar.domain.repository import VoteRepository
from pulsar.domain.value import SubmissionId, TimeWindow, UserId, VoteId
from pulsar.persistence.mappers import (
    row_to_submission,
    row_to_user,
    row_to_vote,
    vote_to_dict,
)
from pulsar.persistence.tables import submissions_table, users_table, votes_table


def _unprefix(row: Dict[str, Any], prefix: str) -> Dict[str, Any]:
    """Pick the columns selected under ``prefix`` and strip it."""
    return {
        key[len(prefix) :]: value
        for key, value in row.items()
        if key.startswith(prefix)
    }


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository.

    Ledger writes run inside a savepoint so the vote row and the
    submission's vote_count change together, even when the request-level
    transaction carries other work.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _window_clause(self, window: TimeWindow):
        clauses = []
        if window.start is not None:
            clauses.append(votes_table.c.created_at >= window.start)
        if window.end is not None:
            clauses.append(votes_table.c.created_at <= window.end)
        return clauses

    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID."""
        stmt = select(votes_table).where(votes_table.c.id == vote_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_vote(dict(row)) if row else None

    async def find_by_id_and_user(
        self, vote_id: VoteId, user_id: UserId
    ) -> Optional[Vote]:
        """Find a vote by ID, only if it belongs to the user."""
        stmt = select(votes_table).where(
            and_(votes_table.c.id == vote_id, votes_table.c.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_vote(dict(row)) if row else None

    async def find_by_user_and_submission(
        self, user_id: UserId, submission_id: SubmissionId
    ) -> Optional[Vote]:
        """Find a user's vote on a specific submission."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.submission_id == submission_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_vote(dict(row)) if row else None

    async def count_by_user(self, user_id: UserId, window: TimeWindow) -> int:
        """Count a user's votes created inside a time window."""
        stmt = (
            select(func.count())
            .select_from(votes_table)
            .where(votes_table.c.user_id == user_id, *self._window_clause(window))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_history(
        self,
        user_id: UserId,
        window: TimeWindow,
        limit: int = 20,
        offset: int = 0,
    ) -> List[VoteHistoryEntry]:
        """Find a user's votes with their submissions, newest first."""
        with logfire.span(
            "vote_repository.find_history",
            user_id=str(user_id),
            limit=limit,
            offset=offset,
        ):
            stmt = (
                select(
                    *[c.label(f"vote_{c.name}") for c in votes_table.c],
                    *[c.label(f"submission_{c.name}") for c in submissions_table.c],
                    *[c.label(f"creator_{c.name}") for c in users_table.c],
                )
                .select_from(
                    votes_table.join(
                        submissions_table,
                        votes_table.c.submission_id == submissions_table.c.id,
                    ).outerjoin(
                        users_table, submissions_table.c.user_id == users_table.c.id
                    )
                )
                .where(votes_table.c.user_id == user_id, *self._window_clause(window))
                .order_by(votes_table.c.created_at.desc())
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)

            entries = []
            for row in result.mappings().all():
                row = dict(row)
                creator = _unprefix(row, "creator_")
                entries.append(
                    VoteHistoryEntry(
                        vote=row_to_vote(_unprefix(row, "vote_")),
                        submission=row_to_submission(_unprefix(row, "submission_")),
                        creator=row_to_user(creator) if creator["id"] else None,
                    )
                )
            return entries

    async def add(self, vote: Vote) -> int:
        """Insert a vote and increment the submission's vote_count."""
        with logfire.span("vote_repository.add", vote_id=str(vote.id)):
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(votes_table).values(**vote_to_dict(vote))
                )
                result = await self.session.execute(
                    update(submissions_table)
                    .where(submissions_table.c.id == vote.submission_id)
                    .values(vote_count=submissions_table.c.vote_count + 1)
                    .returning(submissions_table.c.vote_count)
                )
                return result.scalar_one()

    async def retract(self, vote: Vote) -> Optional[int]:
        """Delete a vote and decrement the submission's vote_count."""
        with logfire.span("vote_repository.retract", vote_id=str(vote.id)):
            async with self.session.begin_nested():
                deleted = await self.session.execute(
                    delete(votes_table).where(
                        and_(
                            votes_table.c.id == vote.id,
                            votes_table.c.user_id == vote.user_id,
                        )
                    )
                )
                if deleted.rowcount == 0:  # type: ignore[attr-defined]
                    return None

                result = await self.session.execute(
                    update(submissions_table)
                    .where(submissions_table.c.id == vote.submission_id)
                    .values(vote_count=submissions_table.c.vote_count - 1)
                    .returning(submissions_table.c.vote_count)
                )
                return result.scalar_one()
