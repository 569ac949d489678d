"""Unit tests for VoteService."""

from datetime import timedelta
from uuid import uuid4

import pytest
import pytest_asyncio

from pulsar.domain.error import (
    BusinessRuleViolationError,
    DuplicateVoteError,
    NotFoundError,
    ValidationError,
    VoteLimitReachedError,
)
from pulsar.domain.repository import SubmissionRepository, UserRepository, VoteRepository
from pulsar.domain.service import VoteService
from pulsar.domain.value import SubmissionId, SubmissionStatus, TimeRange, VoteId
from tests.conftest import local_time, make_submission, make_user, make_vote
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()

NOW = local_time(2026, 3, 14, 18, 30)


@pytest_asyncio.fixture
async def repos(unit_env):
    return (
        await unit_env.get(UserRepository),
        await unit_env.get(SubmissionRepository),
        await unit_env.get(VoteRepository),
    )


async def _count_votes_on(vote_repo, user_ids, submission_id) -> int:
    total = 0
    for user_id in user_ids:
        if await vote_repo.find_by_user_and_submission(user_id, submission_id):
            total += 1
    return total


class TestGetVotableSubmission:
    """Tests for VoteService.get_votable_submission."""

    @pytest.mark.asyncio
    async def test_returns_approved_submission(self, unit_env, repos):
        user_repo, submission_repo, _ = repos
        vote_service = await unit_env.get(VoteService)
        voter = await user_repo.save(make_user("Ravi"))
        creator = await user_repo.save(make_user("Meera"))
        submission = await submission_repo.save(make_submission(creator))

        found = await vote_service.get_votable_submission(submission.id, voter.id)

        assert found.id == submission.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status", [SubmissionStatus.PENDING, SubmissionStatus.REJECTED]
    )
    async def test_unapproved_submission_raises(self, unit_env, repos, status):
        user_repo, submission_repo, _ = repos
        vote_service = await unit_env.get(VoteService)
        voter = await user_repo.save(make_user("Ravi"))
        creator = await user_repo.save(make_user("Meera"))
        submission = await submission_repo.save(
            make_submission(creator, status=status)
        )

        with pytest.raises(
            BusinessRuleViolationError, match="not available for voting"
        ):
            await vote_service.get_votable_submission(submission.id, voter.id)

    @pytest.mark.asyncio
    async def test_missing_submission_raises(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError):
            await vote_service.get_votable_submission(
                SubmissionId(uuid4()), make_user("Ravi").id
            )


class TestCastVote:
    """Tests for cast_vote method."""

    @pytest.mark.asyncio
    async def test_cast_vote_creates_vote_and_increments_count(self, unit_env, repos):
        """Casting a vote should record it and bump vote_count."""
        # Arrange
        user_repo, submission_repo, vote_repo = repos
        vote_service = await unit_env.get(VoteService)
        voter = await user_repo.save(make_user("Ravi"))
        creator = await user_repo.save(make_user("Meera"))
        submission = await submission_repo.save(
            make_submission(creator, vote_count=2)
        )

        # Act
        result = await vote_service.cast_vote(submission.id, voter.id, NOW)

        # Assert
        saved = await vote_repo.find_by_user_and_submission(voter.id, submission.id)
        assert saved == result.vote
        assert saved.created_at == NOW
        assert result.vote_count == 3
        assert (await submission_repo.find_by_id(submission.id)).vote_count == 3
        assert result.quota.votes_used == 1
        assert result.quota.remaining_votes == 2

    @pytest.mark.asyncio
    async def test_cast_vote_on_missing_submission_raises(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError):
            await vote_service.cast_vote(
                SubmissionId(uuid4()), make_user().id, NOW
            )

    @pytest.mark.asyncio
    async def test_cast_vote_on_pending_submission_raises(self, unit_env, repos):
        """Only approved submissions accept votes."""
        user_repo, submission_repo, vote_repo = repos
        vote_service = await unit_env.get(VoteService)
        voter = make_user("Ravi")
        creator = await user_repo.save(make_user("Meera"))
        submission = await submission_repo.save(
            make_submission(creator, status=SubmissionStatus.PENDING)
        )

        with pytest.raises(
            BusinessRuleViolationError, match="not available for voting"
        ):
            await vote_service.cast_vote(submission.id, voter.id, NOW)

        assert await vote_repo.find_by_user_and_submission(voter.id, submission.id) is None

    @pytest.mark.asyncio
    async def test_cannot_vote_for_own_submission(self, unit_env, repos):
        user_repo, submission_repo, _ = repos
        vote_service = await unit_env.get(VoteService)
        creator = await user_repo.save(make_user("Meera"))
        submission = await submission_repo.save(make_submission(creator))

        with pytest.raises(BusinessRuleViolationError, match="own submission"):
            await vote_service.cast_vote(submission.id, creator.id, NOW)

    @pytest.mark.asyncio
    async def test_duplicate_vote_raises_without_double_increment(
        self, unit_env, repos
    ):
        """A second vote on the same submission should be rejected."""
        user_repo, submission_repo, _ = repos
        vote_service = await unit_env.get(VoteService)
        voter = await user_repo.save(make_user("Ravi"))
        creator = await user_repo.save(make_user("Meera"))
        submission = await submission_repo.save(make_submission(creator))
        await vote_service.cast_vote(submission.id, voter.id, NOW)

        with pytest.raises(DuplicateVoteError):
            await vote_service.cast_vote(submission.id, voter.id, NOW)

        assert (await submission_repo.find_by_id(submission.id)).vote_count == 1

    @pytest.mark.asyncio
    async def test_limit_reached_raises_with_quota(self, unit_env, repos):
        """The fourth vote of the day should be refused."""
        # Arrange
        user_repo, submission_repo, vote_repo = repos
        vote_service = await unit_env.get(VoteService)
        voter = await user_repo.save(make_user("Ravi"))
        creator = await user_repo.save(make_user("Meera"))
        submissions = [
            await submission_repo.save(make_submission(creator, title=f"Entry {i}"))
            for i in range(4)
        ]
        for submission in submissions[:3]:
            await vote_service.cast_vote(submission.id, voter.id, NOW)

        # Act
        with pytest.raises(VoteLimitReachedError) as exc_info:
            await vote_service.cast_vote(submissions[3].id, voter.id, NOW)

        # Assert
        assert exc_info.value.quota.votes_used == 3
        assert exc_info.value.quota.remaining_votes == 0
        assert "Try again tomorrow" in str(exc_info.value)
        assert (
            await vote_repo.find_by_user_and_submission(voter.id, submissions[3].id)
            is None
        )
        assert (await submission_repo.find_by_id(submissions[3].id)).vote_count == 0

    @pytest.mark.asyncio
    async def test_quota_resets_at_local_midnight(self, unit_env, repos):
        """Votes from yesterday leave today's quota untouched."""
        user_repo, submission_repo, _ = repos
        vote_service = await unit_env.get(VoteService)
        voter = await user_repo.save(make_user("Ravi"))
        creator = await user_repo.save(make_user("Meera"))
        submissions = [
            await submission_repo.save(make_submission(creator, title=f"Entry {i}"))
            for i in range(4)
        ]
        yesterday = NOW - timedelta(days=1)
        for submission in submissions[:3]:
            await vote_service.cast_vote(submission.id, voter.id, yesterday)

        result = await vote_service.cast_vote(submissions[3].id, voter.id, NOW)

        assert result.quota.votes_used == 1


class TestRetractVote:
    """Tests for retract_vote method."""

    @pytest.mark.asyncio
    async def test_retract_by_submission_decrements_count(self, unit_env, repos):
        """Retracting from a submission with five votes leaves four."""
        # Arrange
        user_repo, submission_repo, vote_repo = repos
        vote_service = await unit_env.get(VoteService)
        voter = await user_repo.save(make_user("Ravi"))
        creator = await user_repo.save(make_user("Meera"))
        submission = await submission_repo.save(
            make_submission(creator, vote_count=4)
        )
        await vote_service.cast_vote(submission.id, voter.id, NOW)
        assert (await submission_repo.find_by_id(submission.id)).vote_count == 5

        # Act
        result = await vote_service.retract_vote(voter.id, submission_id=submission.id)

        # Assert
        assert result.new_vote_count == 4
        assert result.vote.submission_id == submission.id
        assert await vote_repo.find_by_user_and_submission(voter.id, submission.id) is None

        history = await vote_service.list_history(
            voter.id, TimeRange.ALL, now=NOW
        )
        assert history.total == 0
        assert history.entries == []

    @pytest.mark.asyncio
    async def test_retract_by_vote_id(self, unit_env, repos):
        user_repo, submission_repo, vote_repo = repos
        vote_service = await unit_env.get(VoteService)
        voter = await user_repo.save(make_user("Ravi"))
        creator = await user_repo.save(make_user("Meera"))
        submission = await submission_repo.save(make_submission(creator))
        cast = await vote_service.cast_vote(submission.id, voter.id, NOW)

        result = await vote_service.retract_vote(voter.id, vote_id=cast.vote.id)

        assert result.new_vote_count == 0
        assert await vote_repo.find_by_id(cast.vote.id) is None

    @pytest.mark.asyncio
    async def test_vote_id_wins_over_submission_id(self, unit_env, repos):
        """When both identifiers are given the vote ID is used."""
        user_repo, submission_repo, vote_repo = repos
        vote_service = await unit_env.get(VoteService)
        voter = await user_repo.save(make_user("Ravi"))
        creator = await user_repo.save(make_user("Meera"))
        first = await submission_repo.save(make_submission(creator, title="First"))
        second = await submission_repo.save(make_submission(creator, title="Second"))
        first_vote = await vote_service.cast_vote(first.id, voter.id, NOW)
        await vote_service.cast_vote(second.id, voter.id, NOW)

        result = await vote_service.retract_vote(
            voter.id, vote_id=first_vote.vote.id, submission_id=second.id
        )

        assert result.vote.submission_id == first.id
        assert await vote_repo.find_by_user_and_submission(voter.id, second.id)

    @pytest.mark.asyncio
    async def test_cannot_retract_another_users_vote(self, unit_env, repos):
        """Another user's vote is reported as not found and left alone."""
        # Arrange
        user_repo, submission_repo, vote_repo = repos
        vote_service = await unit_env.get(VoteService)
        owner = await user_repo.save(make_user("Ravi"))
        intruder = await user_repo.save(make_user("Kabir"))
        creator = await user_repo.save(make_user("Meera"))
        submission = await submission_repo.save(make_submission(creator))
        cast = await vote_service.cast_vote(submission.id, owner.id, NOW)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await vote_service.retract_vote(intruder.id, vote_id=cast.vote.id)

        assert await vote_repo.find_by_id(cast.vote.id) == cast.vote
        assert (await submission_repo.find_by_id(submission.id)).vote_count == 1

    @pytest.mark.asyncio
    async def test_retract_twice_raises_and_decrements_once(self, unit_env, repos):
        user_repo, submission_repo, _ = repos
        vote_service = await unit_env.get(VoteService)
        voter = await user_repo.save(make_user("Ravi"))
        creator = await user_repo.save(make_user("Meera"))
        submission = await submission_repo.save(
            make_submission(creator, vote_count=2)
        )
        cast = await vote_service.cast_vote(submission.id, voter.id, NOW)
        await vote_service.retract_vote(voter.id, vote_id=cast.vote.id)

        with pytest.raises(NotFoundError):
            await vote_service.retract_vote(voter.id, vote_id=cast.vote.id)

        assert (await submission_repo.find_by_id(submission.id)).vote_count == 2

    @pytest.mark.asyncio
    async def test_unknown_vote_raises(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError):
            await vote_service.retract_vote(make_user().id, vote_id=VoteId(uuid4()))

    @pytest.mark.asyncio
    async def test_requires_an_identifier(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(ValidationError, match="Vote ID or Submission ID required"):
            await vote_service.retract_vote(make_user().id)

    @pytest.mark.asyncio
    async def test_stale_retract_is_a_no_op(self, repos):
        """A retraction that lost a race deletes and decrements nothing."""
        user_repo, submission_repo, vote_repo = repos
        voter = await user_repo.save(make_user("Ravi"))
        creator = await user_repo.save(make_user("Meera"))
        submission = await submission_repo.save(make_submission(creator))
        vote = make_vote(voter, submission, NOW)
        await vote_repo.add(vote)

        assert await vote_repo.retract(vote) == 0
        assert await vote_repo.retract(vote) is None
        assert (await submission_repo.find_by_id(submission.id)).vote_count == 0


class TestVoteCountInvariant:
    """vote_count must always equal the number of votes."""

    @pytest.mark.asyncio
    async def test_count_matches_ledger_after_mixed_operations(self, unit_env, repos):
        # Arrange
        user_repo, submission_repo, vote_repo = repos
        vote_service = await unit_env.get(VoteService)
        creator = await user_repo.save(make_user("Meera"))
        submission = await submission_repo.save(make_submission(creator))
        voters = [await user_repo.save(make_user(f"Voter{i}")) for i in range(5)]

        # Act
        for voter in voters:
            await vote_service.cast_vote(submission.id, voter.id, NOW)
        await vote_service.retract_vote(voters[0].id, submission_id=submission.id)
        await vote_service.retract_vote(voters[3].id, submission_id=submission.id)
        await vote_service.cast_vote(submission.id, voters[0].id, NOW)
        with pytest.raises(NotFoundError):
            await vote_service.retract_vote(voters[3].id, submission_id=submission.id)

        # Assert
        ledger = await _count_votes_on(
            vote_repo, [v.id for v in voters], submission.id
        )
        stored = await submission_repo.find_by_id(submission.id)
        assert ledger == 4
        assert stored.vote_count == ledger


class TestListHistory:
    """Tests for list_history method."""

    async def _vote_over_days(self, repos, days: list[int]):
        """Cast one vote per entry in ``days`` (days before NOW)."""
        user_repo, submission_repo, vote_repo = repos
        voter = await user_repo.save(make_user("Ravi"))
        creator = await user_repo.save(make_user("Meera"))
        for i, days_ago in enumerate(days):
            submission = await submission_repo.save(
                make_submission(creator, title=f"Entry {i}")
            )
            await vote_repo.add(
                make_vote(voter, submission, NOW - timedelta(days=days_ago, minutes=i))
            )
        return voter, creator

    @pytest.mark.asyncio
    async def test_newest_first_with_submission_and_creator(self, unit_env, repos):
        vote_service = await unit_env.get(VoteService)
        voter, creator = await self._vote_over_days(repos, [0, 0, 0])

        history = await vote_service.list_history(voter.id, TimeRange.TODAY, now=NOW)

        assert history.total == 3
        assert [e.submission.title for e in history.entries] == [
            "Entry 0",
            "Entry 1",
            "Entry 2",
        ]
        voted_at = [e.voted_at for e in history.entries]
        assert voted_at == sorted(voted_at, reverse=True)
        assert all(e.creator == creator for e in history.entries)
        assert history.entries[0].submission.vote_count == 1

    @pytest.mark.asyncio
    async def test_time_ranges(self, unit_env, repos):
        """Each range keeps only votes inside its window."""
        vote_service = await unit_env.get(VoteService)
        voter, _ = await self._vote_over_days(repos, [0, 3, 10, 45])

        totals = {
            time_range: (
                await vote_service.list_history(voter.id, time_range, now=NOW)
            ).total
            for time_range in TimeRange
        }

        assert totals == {
            TimeRange.TODAY: 1,
            TimeRange.WEEK: 2,
            TimeRange.MONTH: 3,
            TimeRange.ALL: 4,
        }

    @pytest.mark.asyncio
    async def test_pagination(self, unit_env, repos):
        vote_service = await unit_env.get(VoteService)
        voter, _ = await self._vote_over_days(repos, [0, 1, 2, 3, 4])

        first = await vote_service.list_history(
            voter.id, TimeRange.ALL, page=1, limit=2, now=NOW
        )
        last = await vote_service.list_history(
            voter.id, TimeRange.ALL, page=3, limit=2, now=NOW
        )

        assert [e.submission.title for e in first.entries] == ["Entry 0", "Entry 1"]
        assert first.total_pages == 3
        assert first.has_more is True
        assert [e.submission.title for e in last.entries] == ["Entry 4"]
        assert last.has_more is False

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, unit_env, repos):
        vote_service = await unit_env.get(VoteService)
        voter, _ = await self._vote_over_days(repos, [0])

        history = await vote_service.list_history(
            voter.id, TimeRange.ALL, page=5, limit=10, now=NOW
        )

        assert history.entries == []
        assert history.total == 1
        assert history.has_more is False

    @pytest.mark.asyncio
    async def test_only_own_votes(self, unit_env, repos):
        vote_service = await unit_env.get(VoteService)
        await self._vote_over_days(repos, [0, 0])

        history = await vote_service.list_history(
            make_user().id, TimeRange.ALL, now=NOW
        )

        assert history.total == 0

    @pytest.mark.asyncio
    async def test_invalid_paging_raises(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(ValidationError):
            await vote_service.list_history(make_user().id, page=0, now=NOW)
        with pytest.raises(ValidationError):
            await vote_service.list_history(make_user().id, limit=0, now=NOW)
