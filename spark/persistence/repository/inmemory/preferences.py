"""In-memory preferences repository for testing."""

from typing import Optional

from spark.domain.model.preferences import UserPreferences
from spark.domain.repository.preferences import PreferencesRepository
from spark.domain.value import UserId


class InMemoryPreferencesRepository(PreferencesRepository):
    """In-memory implementation of PreferencesRepository for testing."""

    def __init__(self) -> None:
        self._preferences: dict[UserId, UserPreferences] = {}

    async def find_by_user(self, user_id: UserId) -> Optional[UserPreferences]:
        return self._preferences.get(user_id)

    async def upsert(self, preferences: UserPreferences) -> UserPreferences:
        self._preferences[preferences.user_id] = preferences
        return preferences

    async def delete_by_user(self, user_id: UserId) -> bool:
        return self._preferences.pop(user_id, None) is not None
