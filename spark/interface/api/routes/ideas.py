"""Idea routes."""

from typing import Literal
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query
from pydantic import BaseModel

from spark.application.usecase.idea import (
    GetIdeaRequest,
    GetIdeaResponse,
    GetIdeaUseCase,
    ListIdeasRequest,
    ListIdeasResponse,
    ListIdeasUseCase,
    ToggleBookmarkRequest,
    ToggleBookmarkResponse,
    ToggleBookmarkUseCase,
)
from spark.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from spark.domain.service import JWTService
from spark.domain.value import (
    DifficultyLevel,
    IdeaCategory,
    SortMode,
    TimeCommitment,
    VotableType,
)
from spark.interface.api.auth import optional_user_id, require_user_id

router = APIRouter(prefix="/ideas", tags=["ideas"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for casting a vote."""

    type: Literal["UP", "DOWN"]


def _split(value: str | None) -> list[str]:
    """Parse a comma separated query value."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


@router.get("", response_model=ListIdeasResponse)
async def list_ideas(
    list_ideas_use_case: FromDishka[ListIdeasUseCase],
    jwt_service: FromDishka[JWTService],
    sort: SortMode = SortMode.HOT,
    category: IdeaCategory | None = None,
    difficulty: DifficultyLevel | None = None,
    time_commitment: TimeCommitment | None = None,
    tags: str | None = Query(default=None, description="Comma separated, any-of"),
    tech_stack: str | None = Query(default=None, description="Comma separated, any-of"),
    search: str | None = Query(default=None, max_length=200),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=50),
    auth_token: str | None = Cookie(default=None),
) -> ListIdeasResponse:
    """List published ideas, ranked and filtered.

    Authentication is optional. Authenticated callers get their vote per idea.
    """
    request = ListIdeasRequest(
        sort=sort,
        category=category,
        difficulty=difficulty,
        time_commitment=time_commitment,
        tags=_split(tags),
        tech_stack=_split(tech_stack),
        search=search,
        page=page,
        limit=limit,
        user_id=optional_user_id(jwt_service, auth_token),
    )
    return await list_ideas_use_case.execute(request)


@router.get("/{idea_id}", response_model=GetIdeaResponse)
async def get_idea(
    idea_id: UUID,
    get_idea_use_case: FromDishka[GetIdeaUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetIdeaResponse:
    """Get a single idea.

    Viewing an idea as an authenticated non-author counts a view.

    Raises:
        NotFoundError: If the idea does not exist or is not published
    """
    request = GetIdeaRequest(
        idea_id=str(idea_id),
        user_id=optional_user_id(jwt_service, auth_token),
    )
    return await get_idea_use_case.execute(request)


@router.post("/{idea_id}/vote", response_model=CastVoteResponse)
async def vote_on_idea(
    idea_id: UUID,
    body: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote on an idea.

    Casting the same vote twice removes it. Requires authentication.

    Args:
        idea_id: Idea UUID
        body: Vote polarity
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        New score and the caller's resulting vote
    """
    user_id = require_user_id(jwt_service, auth_token, "vote")

    request = CastVoteRequest(
        votable_type=VotableType.IDEA,
        votable_id=str(idea_id),
        user_id=user_id,
        vote_type=body.type,
    )
    return await cast_vote_use_case.execute(request)


@router.post("/{idea_id}/bookmark", response_model=ToggleBookmarkResponse)
async def toggle_bookmark(
    idea_id: UUID,
    toggle_bookmark_use_case: FromDishka[ToggleBookmarkUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ToggleBookmarkResponse:
    """Bookmark an idea, or remove an existing bookmark.

    Requires authentication.
    """
    user_id = require_user_id(jwt_service, auth_token, "bookmark ideas")

    request = ToggleBookmarkRequest(idea_id=str(idea_id), user_id=user_id)
    return await toggle_bookmark_use_case.execute(request)
