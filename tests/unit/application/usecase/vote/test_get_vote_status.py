"""Unit tests for GetVoteStatusUseCase."""

from uuid import uuid4

import pytest

from pulsar.application.usecase.vote import GetVoteStatusRequest, GetVoteStatusUseCase
from pulsar.domain.repository import SubmissionRepository, UserRepository
from pulsar.domain.service import VoteService
from tests.conftest import make_submission, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestGetVoteStatusUseCase:
    """Tests for GetVoteStatusUseCase."""

    @pytest.mark.asyncio
    async def test_reports_existing_vote(self, unit_env):
        use_case = await unit_env.get(GetVoteStatusUseCase)
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        submission_repo = await unit_env.get(SubmissionRepository)
        voter = await user_repo.save(make_user("Ravi"))
        creator = await user_repo.save(make_user("Meera"))
        submission = await submission_repo.save(make_submission(creator))
        cast = await vote_service.cast_vote(submission.id, voter.id)

        response = await use_case.execute(
            GetVoteStatusRequest(submission_id=str(submission.id), user_id=str(voter.id))
        )

        assert response.has_voted is True
        assert response.vote_id == str(cast.vote.id)

    @pytest.mark.asyncio
    async def test_no_vote(self, unit_env):
        use_case = await unit_env.get(GetVoteStatusUseCase)
        user_repo = await unit_env.get(UserRepository)
        voter = await user_repo.save(make_user("Ravi"))

        response = await use_case.execute(
            GetVoteStatusRequest(submission_id=str(uuid4()), user_id=str(voter.id))
        )

        assert response.has_voted is False
        assert response.vote_id is None

    @pytest.mark.asyncio
    async def test_unknown_user_has_not_voted(self, unit_env):
        use_case = await unit_env.get(GetVoteStatusUseCase)

        response = await use_case.execute(
            GetVoteStatusRequest(submission_id=str(uuid4()), user_id=str(uuid4()))
        )

        assert response.has_voted is False
