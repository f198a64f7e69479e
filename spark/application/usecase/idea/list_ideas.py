"""List ideas use case."""

from datetime import datetime
from math import ceil
from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from spark.domain.model import Idea
from spark.domain.repository import IdeaFilter
from spark.domain.service import IdeaService
from spark.domain.value import (
    DifficultyLevel,
    IdeaCategory,
    SortMode,
    TimeCommitment,
    UserId,
    VoteType,
)


class IdeaListItem(BaseModel):
    """Idea as shown in feeds."""

    idea_id: str
    title: str
    description: str
    category: IdeaCategory
    tags: list[str]
    tech_stack: list[str]
    ai_tech_stack: list[str]
    difficulty: Optional[DifficultyLevel]
    time_commitment: Optional[TimeCommitment]
    author_id: str
    author_username: str
    vote_score: int
    view_count: int
    comment_count: int
    bookmark_count: int
    created_at: datetime
    published_at: Optional[datetime]
    user_vote: Optional[VoteType] = None

    @classmethod
    def from_idea(
        cls, idea: Idea, user_vote: Optional[VoteType] = None, **extra
    ) -> "IdeaListItem":
        return cls(
            idea_id=str(idea.id),
            title=idea.title,
            description=idea.description,
            category=idea.category,
            tags=idea.tags,
            tech_stack=idea.tech_stack,
            ai_tech_stack=idea.ai_tech_stack,
            difficulty=idea.difficulty,
            time_commitment=idea.time_commitment,
            author_id=str(idea.author_id),
            author_username=idea.author_username,
            vote_score=idea.vote_score,
            view_count=idea.view_count,
            comment_count=idea.comment_count,
            bookmark_count=idea.bookmark_count,
            created_at=idea.created_at,
            published_at=idea.published_at,
            user_vote=user_vote,
            **extra,
        )


class Pagination(BaseModel):
    """Page position within a listing."""

    page: int
    limit: int
    total: int
    pages: int


class ListIdeasRequest(BaseModel):
    """List ideas request."""

    sort: SortMode = SortMode.HOT
    category: Optional[IdeaCategory] = None
    difficulty: Optional[DifficultyLevel] = None
    time_commitment: Optional[TimeCommitment] = None
    tags: list[str] = Field(default_factory=list)
    tech_stack: list[str] = Field(default_factory=list)
    search: Optional[str] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=50)
    user_id: str | None = None  # Current user ID (if authenticated)


class ListIdeasResponse(BaseModel):
    """List ideas response."""

    ideas: list[IdeaListItem]
    pagination: Pagination


class ListIdeasUseCase:
    """Use case for the ranked, filtered idea feed."""

    def __init__(self, idea_service: IdeaService) -> None:
        """Initialize list ideas use case.

        Args:
            idea_service: Idea domain service
        """
        self.idea_service = idea_service

    async def execute(self, request: ListIdeasRequest) -> ListIdeasResponse:
        """Execute list ideas flow.

        Args:
            request: List ideas request with filters and pagination

        Returns:
            One page of ranked ideas with the caller's votes
        """
        filter = IdeaFilter(
            category=request.category,
            difficulty=request.difficulty,
            time_commitment=request.time_commitment,
            tags=request.tags,
            tech_stack=request.tech_stack,
            search=request.search or None,
        )
        offset = (request.page - 1) * request.limit

        ideas, total = await self.idea_service.list_ideas(
            filter, sort=request.sort, limit=request.limit, offset=offset
        )

        # Batch lookup of the caller's votes to avoid N+1 queries
        user_votes = {}
        if request.user_id and ideas:
            user_votes = await self.idea_service.get_user_votes(
                UserId(UUID(request.user_id)), [idea.id for idea in ideas]
            )

        logfire.info("Idea feed served", page=request.page, total=total)

        return ListIdeasResponse(
            ideas=[
                IdeaListItem.from_idea(idea, user_vote=user_votes.get(idea.id))
                for idea in ideas
            ],
            pagination=Pagination(
                page=request.page,
                limit=request.limit,
                total=total,
                pages=ceil(total / request.limit),
            ),
        )
