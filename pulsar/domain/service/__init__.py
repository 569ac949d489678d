"""Domain services."""

from .base import Service
from .jwt_service import JWTService
from .quota_service import VoteQuotaService
from .submission_service import SubmissionService
from .user_service import UserService
from .vote_service import CastResult, RetractResult, VoteService

__all__ = [
    "CastResult",
    "JWTService",
    "RetractResult",
    "Service",
    "SubmissionService",
    "UserService",
    "VoteQuotaService",
    "VoteService",
]
