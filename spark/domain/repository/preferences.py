"""Preferences repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from spark.domain.model.preferences import UserPreferences
from spark.domain.value import UserId


class PreferencesRepository(ABC):
    """Repository for stored user preferences."""

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> Optional[UserPreferences]:
        """Find a user's stored preferences.

        Args:
            user_id: The user's ID

        Returns:
            The stored preferences, or None if the user never saved any
        """
        pass

    @abstractmethod
    async def upsert(self, preferences: UserPreferences) -> UserPreferences:
        """Create or replace a user's preferences.

        Args:
            preferences: Full preferences to store

        Returns:
            The stored preferences
        """
        pass

    @abstractmethod
    async def delete_by_user(self, user_id: UserId) -> bool:
        """Delete a user's stored preferences.

        Args:
            user_id: The user's ID

        Returns:
            True if a row was deleted, False if none was stored
        """
        pass
