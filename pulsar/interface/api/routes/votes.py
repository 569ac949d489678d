"""Vote routes: daily quota, vote history and casting."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status
from fastapi.responses import JSONResponse

from pulsar.application.usecase.base import CamelModel
from pulsar.application.usecase.quota import (
    GetVoteQuotaRequest,
    GetVoteQuotaUseCase,
    VoteQuotaResponse,
)
from pulsar.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    GetVoteStatusRequest,
    GetVoteStatusUseCase,
    ListVoteHistoryRequest,
    ListVoteHistoryResponse,
    ListVoteHistoryUseCase,
    RetractVoteRequest,
    RetractVoteResponse,
    RetractVoteUseCase,
    VoteLimitReachedResponse,
    VoteStatusResponse,
)
from pulsar.domain.error import (
    BusinessRuleViolationError,
    NotFoundError,
    ValidationError,
    VoteLimitReachedError,
)
from pulsar.domain.service import JWTService
from pulsar.domain.value import TimeRange

router = APIRouter(prefix="/votes", tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(CamelModel):
    """API request for casting a vote."""

    submission_id: str
    session_id: str | None = None


def _require_user(jwt_service: JWTService, auth_token: str | None, action: str) -> str:
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id


@router.get("/limits", response_model=VoteQuotaResponse)
async def get_vote_limits(
    get_vote_quota_use_case: FromDishka[GetVoteQuotaUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
):
    """Get the caller's remaining votes for today.

    Guests get an empty quota with a sign-in hint. Failures never report
    votes as available.

    Args:
        get_vote_quota_use_case: Get vote quota use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Daily quota (200), closed quota for unknown users (404) or
        lookup failures (500)
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await get_vote_quota_use_case.execute(
            GetVoteQuotaRequest(user_id=user_id)
        )
    except NotFoundError:
        logfire.warn("Vote quota requested for unknown user", user_id=user_id)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=get_vote_quota_use_case.closed("User not found").model_dump(
                mode="json", by_alias=True
            ),
        )
    except Exception as e:
        logfire.error("Vote quota lookup failed", user_id=user_id, error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=get_vote_quota_use_case.closed(
                "Failed to get vote limits"
            ).model_dump(mode="json", by_alias=True),
        )


@router.get("/history", response_model=ListVoteHistoryResponse)
async def list_vote_history(
    list_vote_history_use_case: FromDishka[ListVoteHistoryUseCase],
    jwt_service: FromDishka[JWTService],
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
    time_range: str | None = Query(default=None, alias="timeRange"),
    auth_token: str | None = Cookie(default=None),
) -> ListVoteHistoryResponse:
    """List the caller's votes, newest first.

    Args:
        list_vote_history_use_case: List vote history use case from DI
        jwt_service: JWT service for token verification (injected)
        page: 1-based page number
        limit: Page size (capped by configuration)
        time_range: today, week, month or all (unknown values mean all)
        auth_token: JWT token from cookie

    Returns:
        One page of vote history

    Raises:
        HTTPException: If not authenticated, user not found or bad paging
    """
    user_id = _require_user(jwt_service, auth_token, "view vote history")

    try:
        request = ListVoteHistoryRequest(
            user_id=user_id,
            page=page,
            limit=limit,
            time_range=TimeRange.parse(time_range),
        )
        return await list_vote_history_use_case.execute(request)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ValidationError, ValueError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/history", response_model=RetractVoteResponse)
async def retract_vote(
    retract_vote_use_case: FromDishka[RetractVoteUseCase],
    jwt_service: FromDishka[JWTService],
    vote_id: str | None = Query(default=None, alias="voteId"),
    submission_id: str | None = Query(default=None, alias="submissionId"),
    auth_token: str | None = Cookie(default=None),
) -> RetractVoteResponse:
    """Retract one of the caller's votes.

    The vote is picked by ``voteId`` or, failing that, by ``submissionId``.
    Votes of other users are reported as not found.

    Args:
        retract_vote_use_case: Retract vote use case from DI
        jwt_service: JWT service for token verification (injected)
        vote_id: Vote UUID
        submission_id: Submission UUID
        auth_token: JWT token from cookie

    Returns:
        Affected submission and its new vote count

    Raises:
        HTTPException: If not authenticated, no identifier given or vote not found
    """
    user_id = _require_user(jwt_service, auth_token, "remove vote")

    if not vote_id and not submission_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Vote ID or Submission ID required",
        )

    try:
        request = RetractVoteRequest(
            user_id=user_id, vote_id=vote_id, submission_id=submission_id
        )
        return await retract_vote_use_case.execute(request)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("", response_model=CastVoteResponse)
async def cast_vote(
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
):
    """Cast a vote on a submission, or take it back if already cast.

    Args:
        request: Submission to vote on
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Action taken with the new vote count and quota, or the limit
        payload (429) when no votes are left today

    Raises:
        HTTPException: If not authenticated, submission not found or the
            vote is not allowed
    """
    user_id = _require_user(jwt_service, auth_token, "vote")

    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                submission_id=request.submission_id,
                user_id=user_id,
                session_id=request.session_id,
            )
        )
    except VoteLimitReachedError as e:
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=VoteLimitReachedResponse.from_quota(e.quota, str(e)).model_dump(
                mode="json", by_alias=True
            ),
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (BusinessRuleViolationError, ValidationError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("", response_model=VoteStatusResponse)
async def get_vote_status(
    get_vote_status_use_case: FromDishka[GetVoteStatusUseCase],
    jwt_service: FromDishka[JWTService],
    submission_id: str | None = Query(default=None, alias="submissionId"),
    auth_token: str | None = Cookie(default=None),
) -> VoteStatusResponse:
    """Check whether the caller has voted on a submission.

    Args:
        get_vote_status_use_case: Get vote status use case from DI
        jwt_service: JWT service for token verification (injected)
        submission_id: Submission UUID
        auth_token: JWT token from cookie

    Returns:
        Whether a vote exists and its ID

    Raises:
        HTTPException: If not authenticated, submission ID missing or unknown
    """
    user_id = _require_user(jwt_service, auth_token, "check vote status")

    if not submission_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Submission ID required",
        )

    try:
        return await get_vote_status_use_case.execute(
            GetVoteStatusRequest(submission_id=submission_id, user_id=user_id)
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
