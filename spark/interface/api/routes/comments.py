"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from spark.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from spark.domain.service import JWTService
from spark.domain.value import VotableType
from spark.interface.api.auth import require_user_id
from spark.interface.api.routes.ideas import VoteAPIRequest

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


@router.post("/{comment_id}/vote", response_model=CastVoteResponse)
async def vote_on_comment(
    comment_id: UUID,
    body: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote on a comment.

    Casting the same vote twice removes it. Requires authentication.

    Args:
        comment_id: Comment UUID
        body: Vote polarity
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        New comment score and the caller's resulting vote
    """
    user_id = require_user_id(jwt_service, auth_token, "vote")

    request = CastVoteRequest(
        votable_type=VotableType.COMMENT,
        votable_id=str(comment_id),
        user_id=user_id,
        vote_type=body.type,
    )
    return await cast_vote_use_case.execute(request)
