"""Unit tests for PreferencesService."""

from uuid import uuid4

import pytest

from spark.domain.error import InvalidArgumentError
from spark.domain.repository import PreferencesRepository
from spark.domain.service import PreferencesService
from spark.domain.value import DifficultyLevel, IdeaCategory, UserId
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestPreferences:
    """Tests for get, update and reset."""

    @pytest.mark.asyncio
    async def test_defaults_when_nothing_stored(self, unit_env):
        # Arrange
        service = await unit_env.get(PreferencesService)
        repo = await unit_env.get(PreferencesRepository)
        user_id = UserId(uuid4())

        # Act
        preferences = await service.get(user_id)

        # Assert
        assert preferences.user_id == user_id
        assert preferences.preferred_categories == []
        assert preferences.enable_recommendations is True
        assert preferences.enable_trending is True
        assert await repo.find_by_user(user_id) is None

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, unit_env):
        """Fields not mentioned in an update are left as they were."""
        # Arrange
        service = await unit_env.get(PreferencesService)
        user_id = UserId(uuid4())
        await service.update(user_id, {"preferred_tech_stack": ["Rust"]})

        # Act
        updated = await service.update(
            user_id,
            {
                "preferred_categories": ["WEB", "IOT"],
                "preferred_difficulty": ["BEGINNER"],
                "user_id": str(uuid4()),  # ignored
            },
        )

        # Assert
        assert updated.user_id == user_id
        assert updated.preferred_tech_stack == ["Rust"]
        assert updated.preferred_categories == [IdeaCategory.WEB, IdeaCategory.IOT]
        assert updated.preferred_difficulty == [DifficultyLevel.BEGINNER]
        assert (await service.get(user_id)) == updated

    @pytest.mark.asyncio
    async def test_invalid_enum_value_rejected(self, unit_env):
        # Arrange
        service = await unit_env.get(PreferencesService)

        # Act & Assert
        with pytest.raises(InvalidArgumentError, match="Invalid preferences"):
            await service.update(UserId(uuid4()), {"preferred_categories": ["SPACE"]})

    @pytest.mark.asyncio
    async def test_reset_returns_defaults(self, unit_env):
        # Arrange
        service = await unit_env.get(PreferencesService)
        repo = await unit_env.get(PreferencesRepository)
        user_id = UserId(uuid4())
        await service.update(user_id, {"enable_recommendations": False})

        # Act
        reset = await service.reset(user_id)

        # Assert
        assert reset.enable_recommendations is True
        assert await repo.find_by_user(user_id) is None
