"""PostgreSQL implementation of Activity repository."""

from typing import List, Optional

from sqlalchemy import desc, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from spark.domain.model import Activity
from spark.domain.repository import ActivityRepository
from spark.domain.value import ActivityType, UserId
from spark.persistence.mappers import activity_to_dict, row_to_activity
from spark.persistence.tables import activities_table


class PostgresActivityRepository(ActivityRepository):
    """PostgreSQL implementation of ActivityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def append(self, activity: Activity) -> Activity:
        stmt = insert(activities_table).values(**activity_to_dict(activity))
        await self.session.execute(stmt)
        await self.session.flush()
        return activity

    async def find_by_user(
        self,
        user_id: UserId,
        activity_type: Optional[ActivityType] = None,
        limit: int = 100,
    ) -> List[Activity]:
        stmt = select(activities_table).where(activities_table.c.user_id == user_id)
        if activity_type:
            stmt = stmt.where(activities_table.c.type == activity_type.value)
        stmt = stmt.order_by(desc(activities_table.c.created_at)).limit(limit)
        result = await self.session.execute(stmt)
        return [row_to_activity(row._asdict()) for row in result.fetchall()]
