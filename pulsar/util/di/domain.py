"""Domain layer DI providers."""

from dishka import Scope, provide

from pulsar.config import AuthSettings, VotingSettings
from pulsar.domain.repository import (
    SubmissionRepository,
    UserRepository,
    VoteRepository,
)
from pulsar.domain.service import (
    JWTService,
    SubmissionService,
    UserService,
    VoteQuotaService,
    VoteService,
)
from pulsar.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_submission_service(
        self, submission_repository: SubmissionRepository
    ) -> SubmissionService:
        """Provide submission domain service."""
        return SubmissionService(submission_repository=submission_repository)

    @provide
    def get_vote_quota_service(
        self, vote_repository: VoteRepository, voting_settings: VotingSettings
    ) -> VoteQuotaService:
        """Provide vote quota domain service."""
        return VoteQuotaService(
            vote_repository=vote_repository, voting_settings=voting_settings
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        submission_service: SubmissionService,
        quota_service: VoteQuotaService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            submission_service=submission_service,
            quota_service=quota_service,
        )
