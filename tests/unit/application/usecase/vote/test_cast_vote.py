"""Unit tests for CastVoteUseCase."""

from uuid import uuid4

import pytest

from pulsar.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from pulsar.domain.error import (
    BusinessRuleViolationError,
    NotFoundError,
    VoteLimitReachedError,
)
from pulsar.domain.repository import (
    SubmissionRepository,
    UserRepository,
    VoteRepository,
)
from pulsar.domain.value import SubmissionStatus, VoteAction
from tests.conftest import make_submission, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _seed(unit_env, count: int = 1):
    user_repo = await unit_env.get(UserRepository)
    submission_repo = await unit_env.get(SubmissionRepository)
    voter = await user_repo.save(make_user("Ravi"))
    creator = await user_repo.save(make_user("Meera"))
    submissions = [
        await submission_repo.save(make_submission(creator, title=f"Entry {i}"))
        for i in range(count)
    ]
    return voter, creator, submissions


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_first_vote_is_added(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        voter, _, [submission] = await _seed(unit_env)

        # Act
        response = await use_case.execute(
            CastVoteRequest(submission_id=str(submission.id), user_id=str(voter.id))
        )

        # Assert
        assert response.success is True
        assert response.action == VoteAction.ADDED
        assert response.vote_count == 1
        assert response.votes_used == 1
        assert response.remaining_votes == 2
        assert response.message == "Vote cast! You have 2 votes remaining today."

    @pytest.mark.asyncio
    async def test_second_request_toggles_vote_off(self, unit_env):
        """Voting again on the same submission retracts and refunds the vote."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        voter, _, [submission] = await _seed(unit_env)
        request = CastVoteRequest(
            submission_id=str(submission.id), user_id=str(voter.id)
        )
        await use_case.execute(request)

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.action == VoteAction.REMOVED
        assert response.vote_count == 0
        assert response.votes_used == 0
        assert response.remaining_votes == 3

    @pytest.mark.asyncio
    async def test_last_vote_message(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        voter, _, submissions = await _seed(unit_env, count=3)

        for submission in submissions:
            response = await use_case.execute(
                CastVoteRequest(
                    submission_id=str(submission.id), user_id=str(voter.id)
                )
            )

        assert response.remaining_votes == 0
        assert response.message == "Vote cast! You have used all 3 votes for today."

    @pytest.mark.asyncio
    async def test_fourth_vote_hits_limit(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        voter, _, submissions = await _seed(unit_env, count=4)
        for submission in submissions[:3]:
            await use_case.execute(
                CastVoteRequest(
                    submission_id=str(submission.id), user_id=str(voter.id)
                )
            )

        with pytest.raises(VoteLimitReachedError):
            await use_case.execute(
                CastVoteRequest(
                    submission_id=str(submissions[3].id), user_id=str(voter.id)
                )
            )

    @pytest.mark.asyncio
    async def test_toggle_off_works_with_no_votes_left(self, unit_env):
        """Taking a vote back is allowed even when the quota is used up."""
        use_case = await unit_env.get(CastVoteUseCase)
        voter, _, submissions = await _seed(unit_env, count=3)
        for submission in submissions:
            await use_case.execute(
                CastVoteRequest(
                    submission_id=str(submission.id), user_id=str(voter.id)
                )
            )

        response = await use_case.execute(
            CastVoteRequest(submission_id=str(submissions[0].id), user_id=str(voter.id))
        )

        assert response.action == VoteAction.REMOVED
        assert response.remaining_votes == 1

    @pytest.mark.asyncio
    async def test_own_submission_rejected(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        _, creator, [submission] = await _seed(unit_env)

        with pytest.raises(BusinessRuleViolationError):
            await use_case.execute(
                CastVoteRequest(
                    submission_id=str(submission.id), user_id=str(creator.id)
                )
            )

    @pytest.mark.asyncio
    async def test_unknown_submission_raises_not_found(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        voter, _, _ = await _seed(unit_env, count=0)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CastVoteRequest(submission_id=str(uuid4()), user_id=str(voter.id))
            )

    @pytest.mark.asyncio
    async def test_unknown_user_raises_not_found(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        _, _, [submission] = await _seed(unit_env)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CastVoteRequest(submission_id=str(submission.id), user_id=str(uuid4()))
            )

    @pytest.mark.asyncio
    async def test_toggle_off_on_rejected_submission_is_refused(self, unit_env):
        """A vote on a submission that was rejected later cannot be toggled off."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        submission_repo = await unit_env.get(SubmissionRepository)
        vote_repo = await unit_env.get(VoteRepository)
        voter, _, [submission] = await _seed(unit_env)
        request = CastVoteRequest(
            submission_id=str(submission.id), user_id=str(voter.id)
        )
        await use_case.execute(request)
        voted = await submission_repo.find_by_id(submission.id)
        await submission_repo.save(
            voted.model_copy(update={"status": SubmissionStatus.REJECTED})
        )

        # Act / Assert
        with pytest.raises(BusinessRuleViolationError, match="not available"):
            await use_case.execute(request)

        assert await vote_repo.find_by_user_and_submission(voter.id, submission.id)
        unchanged = await submission_repo.find_by_id(submission.id)
        assert unchanged.vote_count == 1
