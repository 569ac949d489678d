"""Vote use cases."""

from .cast_vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    VoteLimitReachedResponse,
)
from .get_vote_status import (
    GetVoteStatusRequest,
    GetVoteStatusUseCase,
    VoteStatusResponse,
)
from .list_vote_history import (
    ListVoteHistoryRequest,
    ListVoteHistoryResponse,
    ListVoteHistoryUseCase,
)
from .retract_vote import RetractVoteRequest, RetractVoteResponse, RetractVoteUseCase

__all__ = [
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "VoteLimitReachedResponse",
    "GetVoteStatusRequest",
    "GetVoteStatusUseCase",
    "VoteStatusResponse",
    "ListVoteHistoryRequest",
    "ListVoteHistoryResponse",
    "ListVoteHistoryUseCase",
    "RetractVoteRequest",
    "RetractVoteResponse",
    "RetractVoteUseCase",
]
