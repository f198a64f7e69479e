"""Preferences domain service."""

from typing import Any

import logfire
from pydantic import ValidationError

from spark.domain.error import InvalidArgumentError
from spark.domain.model import UserPreferences
from spark.domain.model.common import utc_now
from spark.domain.repository import PreferencesRepository
from spark.domain.value import UserId

from .base import Service

# Fields a user may change through a partial update
UPDATABLE_FIELDS = frozenset(
    {
        "preferred_categories",
        "preferred_tech_stack",
        "preferred_difficulty",
        "preferred_time_commitment",
        "enable_recommendations",
        "enable_trending",
        "recommendation_weight",
    }
)

# Suggestions offered by the preferences form
COMMON_TECH_STACK = (
    "React", "Vue", "Angular", "JavaScript", "TypeScript", "Node.js",
    "Python", "Django", "Flask", "Java", "Spring", "C#", ".NET",
    "PHP", "Laravel", "Ruby", "Rails", "Go", "Rust", "Swift",
    "Kotlin", "Flutter", "React Native", "MongoDB", "PostgreSQL",
    "MySQL", "Redis", "AWS", "Docker", "Kubernetes", "GraphQL",
    "REST API", "Machine Learning", "TensorFlow", "PyTorch",
    "Blockchain", "Solidity", "Web3", "Next.js", "Nuxt.js",
    "Express.js", "FastAPI", "Firebase", "Supabase",
)  # fmt: skip


class PreferencesService(Service):
    """Domain service for user recommendation preferences."""

    def __init__(self, preferences_repository: PreferencesRepository) -> None:
        """Initialize preferences service.

        Args:
            preferences_repository: Preferences repository
        """
        self.preferences_repository = preferences_repository

    async def get(self, user_id: UserId) -> UserPreferences:
        """Get stored preferences, or defaults if none were saved.

        Args:
            user_id: User ID

        Returns:
            The user's preferences
        """
        with logfire.span("preferences_service.get", user_id=str(user_id)):
            stored = await self.preferences_repository.find_by_user(user_id)
            return stored or UserPreferences.defaults(user_id)

    async def update(self, user_id: UserId, changes: dict[str, Any]) -> UserPreferences:
        """Apply a partial update, creating the preferences if needed.

        Args:
            user_id: User ID
            changes: Field values to change. Unknown fields are ignored.

        Returns:
            The stored preferences

        Raises:
            InvalidArgumentError: If a value is not valid for its field
        """
        with logfire.span(
            "preferences_service.update",
            user_id=str(user_id),
            fields=sorted(changes),
        ):
            current = await self.get(user_id)
            update = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
            update["updated_at"] = utc_now()

            # Revalidate so enum values given as strings are coerced
            try:
                merged = UserPreferences.model_validate(
                    {**current.model_dump(), **update}
                )
            except ValidationError as e:
                raise InvalidArgumentError(
                    f"Invalid preferences: {e.errors()[0]['msg']}"
                )
            saved = await self.preferences_repository.upsert(merged)
            logfire.info("Preferences updated", user_id=str(user_id))
            return saved

    async def reset(self, user_id: UserId) -> UserPreferences:
        """Delete stored preferences, returning the defaults.

        Args:
            user_id: User ID

        Returns:
            Default preferences
        """
        with logfire.span("preferences_service.reset", user_id=str(user_id)):
            deleted = await self.preferences_repository.delete_by_user(user_id)
            logfire.info("Preferences reset", user_id=str(user_id), deleted=deleted)
            return UserPreferences.defaults(user_id)
