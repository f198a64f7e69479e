"""Request-scoped recommendation structures (never persisted)."""

from typing import Optional

from pydantic import Field

from spark.domain.model.common import DomainModel
from spark.domain.model.idea import Idea
from spark.domain.value import DifficultyLevel, IdeaCategory, TimeCommitment


class RecommendationFilters(DomainModel):
    """Explicit request-level overrides (query parameters)."""

    category: Optional[IdeaCategory] = None
    difficulty: Optional[DifficultyLevel] = None
    time_commitment: Optional[TimeCommitment] = None


class RecommendationCriteria(DomainModel):
    """Merged per-request criteria used to select candidates.

    Empty lists mean "no constraint" on that dimension.
    """

    categories: list[IdeaCategory] = Field(default_factory=list)
    tech_stack: list[str] = Field(default_factory=list)
    difficulty: list[DifficultyLevel] = Field(default_factory=list)
    time_commitment: list[TimeCommitment] = Field(default_factory=list)


class ScoreBreakdown(DomainModel):
    """Individual terms of a recommendation score."""

    engagement: float
    category_bonus: float
    tech_bonus: float
    recency_bonus: float
    karma_bonus: float

    @property
    def total(self) -> float:
        return (
            self.engagement
            + self.category_bonus
            + self.tech_bonus
            + self.recency_bonus
            + self.karma_bonus
        )


class ScoredIdea(DomainModel):
    """Candidate idea with its personalized score."""

    idea: Idea
    author_karma: int
    score: float
    breakdown: ScoreBreakdown


class RecommendationResult(DomainModel):
    """Ordered recommendations with the criteria that produced them."""

    recommendations: list[ScoredIdea]
    criteria: RecommendationCriteria
    total: int
