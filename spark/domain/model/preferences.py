"""User recommendation preferences."""

from datetime import datetime

from pydantic import Field

from spark.domain.model.common import DomainModel, utc_now
from spark.domain.value import DifficultyLevel, IdeaCategory, TimeCommitment, UserId


class UserPreferences(DomainModel):
    """Explicit preferences a user has set for recommendations.

    Never required to exist: readers fall back to ``UserPreferences.defaults``.
    """

    user_id: UserId
    preferred_categories: list[IdeaCategory] = Field(default_factory=list)
    preferred_tech_stack: list[str] = Field(default_factory=list)
    preferred_difficulty: list[DifficultyLevel] = Field(default_factory=list)
    preferred_time_commitment: list[TimeCommitment] = Field(default_factory=list)
    enable_recommendations: bool = True
    enable_trending: bool = True
    recommendation_weight: dict[str, float] = Field(default_factory=dict)
    updated_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def defaults(cls, user_id: UserId) -> "UserPreferences":
        """Preferences for a user who has never saved any."""
        return cls(user_id=user_id)
