"""Vote quota use cases."""

from .get_vote_quota import (
    GetVoteQuotaRequest,
    GetVoteQuotaUseCase,
    QuotaUserInfo,
    VoteQuotaResponse,
)

__all__ = [
    "GetVoteQuotaRequest",
    "GetVoteQuotaUseCase",
    "QuotaUserInfo",
    "VoteQuotaResponse",
]
