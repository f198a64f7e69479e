"""PostgreSQL implementation of Preferences repository."""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from spark.domain.model import UserPreferences
from spark.domain.repository import PreferencesRepository
from spark.domain.value import UserId
from spark.persistence.mappers import preferences_to_dict, row_to_preferences
from spark.persistence.tables import user_preferences_table


class PostgresPreferencesRepository(PreferencesRepository):
    """PostgreSQL implementation of PreferencesRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user(self, user_id: UserId) -> Optional[UserPreferences]:
        stmt = select(user_preferences_table).where(
            user_preferences_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_preferences(row._asdict()) if row else None

    async def upsert(self, preferences: UserPreferences) -> UserPreferences:
        """Create or replace a user's preferences in one statement."""
        values = preferences_to_dict(preferences)
        stmt = insert(user_preferences_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[user_preferences_table.c.user_id],
            set_={k: v for k, v in values.items() if k != "user_id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return preferences

    async def delete_by_user(self, user_id: UserId) -> bool:
        stmt = delete(user_preferences_table).where(
            user_preferences_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
