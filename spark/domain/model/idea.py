"""Idea aggregate root.

Ideas are the primary content type. Their engagement counters (vote score,
views, comments, bookmarks) are denormalized onto the row and only ever
changed through atomic increments.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from spark.domain.model.common import DomainModel, utc_now
from spark.domain.value import (
    DifficultyLevel,
    IdeaCategory,
    IdeaId,
    IdeaStatus,
    TimeCommitment,
    UserId,
)


class Idea(DomainModel):
    """Idea aggregate root."""

    id: IdeaId
    author_id: UserId
    author_username: str
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    category: IdeaCategory = IdeaCategory.OTHER
    tags: list[str] = Field(default_factory=list)
    tech_stack: list[str] = Field(default_factory=list)
    ai_tech_stack: list[str] = Field(default_factory=list)
    difficulty: Optional[DifficultyLevel] = None
    time_commitment: Optional[TimeCommitment] = None
    status: IdeaStatus = IdeaStatus.PUBLISHED
    vote_score: int = 0
    view_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    bookmark_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now)
    published_at: Optional[datetime] = None

    @property
    def tech_tokens(self) -> list[str]:
        """All technology-like tokens: tech stack, AI tech stack and tags."""
        return [*self.tech_stack, *self.ai_tech_stack, *self.tags]


class IdeaWithAuthor(DomainModel):
    """Idea joined with the parts of its author used for scoring."""

    idea: Idea
    author_karma: int = 0
