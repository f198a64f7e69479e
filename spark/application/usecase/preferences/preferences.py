"""Preferences use cases."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from spark.domain.model import UserPreferences
from spark.domain.service import PreferencesService
from spark.domain.service.preferences_service import COMMON_TECH_STACK
from spark.domain.value import DifficultyLevel, IdeaCategory, TimeCommitment, UserId


class PreferencesResponse(BaseModel):
    """User preferences response."""

    preferred_categories: list[IdeaCategory]
    preferred_tech_stack: list[str]
    preferred_difficulty: list[DifficultyLevel]
    preferred_time_commitment: list[TimeCommitment]
    enable_recommendations: bool
    enable_trending: bool
    recommendation_weight: dict[str, float]
    updated_at: datetime
    message: Optional[str] = None

    @classmethod
    def from_preferences(
        cls, preferences: UserPreferences, message: Optional[str] = None
    ) -> "PreferencesResponse":
        return cls(
            **preferences.model_dump(exclude={"user_id"}),
            message=message,
        )


class GetPreferencesRequest(BaseModel):
    """Get preferences request."""

    user_id: str


class UpdatePreferencesRequest(BaseModel):
    """Partial preferences update. Omitted fields keep their value."""

    user_id: str
    preferred_categories: Optional[list[str]] = None
    preferred_tech_stack: Optional[list[str]] = None
    preferred_difficulty: Optional[list[str]] = None
    preferred_time_commitment: Optional[list[str]] = None
    enable_recommendations: Optional[bool] = None
    enable_trending: Optional[bool] = None
    recommendation_weight: Optional[dict[str, float]] = None


class ResetPreferencesRequest(BaseModel):
    """Reset preferences request."""

    user_id: str


class PreferenceOptionsResponse(BaseModel):
    """Values offered by the preferences form."""

    categories: list[IdeaCategory]
    difficulty_levels: list[DifficultyLevel]
    time_commitments: list[TimeCommitment]
    common_tech_stack: list[str]


class GetPreferencesUseCase:
    """Use case for reading preferences (stored or defaults)."""

    def __init__(self, preferences_service: PreferencesService) -> None:
        """Initialize get preferences use case.

        Args:
            preferences_service: Preferences domain service
        """
        self.preferences_service = preferences_service

    async def execute(self, request: GetPreferencesRequest) -> PreferencesResponse:
        preferences = await self.preferences_service.get(
            UserId(UUID(request.user_id))
        )
        return PreferencesResponse.from_preferences(preferences)


class UpdatePreferencesUseCase:
    """Use case for partially updating preferences."""

    def __init__(self, preferences_service: PreferencesService) -> None:
        """Initialize update preferences use case.

        Args:
            preferences_service: Preferences domain service
        """
        self.preferences_service = preferences_service

    async def execute(self, request: UpdatePreferencesRequest) -> PreferencesResponse:
        """Execute update preferences flow.

        Args:
            request: Fields to change

        Returns:
            The stored preferences

        Raises:
            InvalidArgumentError: If a value is not valid for its field
        """
        changes = request.model_dump(exclude={"user_id"}, exclude_none=True)
        preferences = await self.preferences_service.update(
            UserId(UUID(request.user_id)), changes
        )
        return PreferencesResponse.from_preferences(
            preferences, message="Preferences updated successfully"
        )


class ResetPreferencesUseCase:
    """Use case for resetting preferences to defaults."""

    def __init__(self, preferences_service: PreferencesService) -> None:
        """Initialize reset preferences use case.

        Args:
            preferences_service: Preferences domain service
        """
        self.preferences_service = preferences_service

    async def execute(self, request: ResetPreferencesRequest) -> PreferencesResponse:
        preferences = await self.preferences_service.reset(
            UserId(UUID(request.user_id))
        )
        return PreferencesResponse.from_preferences(
            preferences, message="Preferences reset to defaults"
        )


class GetPreferenceOptionsUseCase:
    """Use case for listing the values the preferences form offers."""

    async def execute(self) -> PreferenceOptionsResponse:
        return PreferenceOptionsResponse(
            categories=list(IdeaCategory),
            difficulty_levels=list(DifficultyLevel),
            time_commitments=list(TimeCommitment),
            common_tech_stack=list(COMMON_TECH_STACK),
        )
