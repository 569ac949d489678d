"""Application layer DI providers."""

from dishka import Scope, provide

from pulsar.application.usecase.quota import GetVoteQuotaUseCase
from pulsar.application.usecase.vote import (
    CastVoteUseCase,
    GetVoteStatusUseCase,
    ListVoteHistoryUseCase,
    RetractVoteUseCase,
)
from pulsar.config import VotingSettings
from pulsar.domain.service import (
    UserService,
    VoteQuotaService,
    VoteService,
)
from pulsar.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Quota use cases
    @provide(scope=Scope.REQUEST)
    def get_vote_quota_use_case(
        self, quota_service: VoteQuotaService, user_service: UserService
    ) -> GetVoteQuotaUseCase:
        """Provide get vote quota use case."""
        return GetVoteQuotaUseCase(
            quota_service=quota_service, user_service=user_service
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self,
        vote_service: VoteService,
        quota_service: VoteQuotaService,
        user_service: UserService,
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            vote_service=vote_service,
            quota_service=quota_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_vote_status_use_case(
        self, vote_service: VoteService, user_service: UserService
    ) -> GetVoteStatusUseCase:
        """Provide get vote status use case."""
        return GetVoteStatusUseCase(
            vote_service=vote_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_retract_vote_use_case(
        self, vote_service: VoteService, user_service: UserService
    ) -> RetractVoteUseCase:
        """Provide retract vote use case."""
        return RetractVoteUseCase(vote_service=vote_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_list_vote_history_use_case(
        self,
        vote_service: VoteService,
        user_service: UserService,
        voting_settings: VotingSettings,
    ) -> ListVoteHistoryUseCase:
        """Provide list vote history use case."""
        return ListVoteHistoryUseCase(
            vote_service=vote_service,
            user_service=user_service,
            voting_settings=voting_settings,
        )
