"""In-memory activity repository for testing."""

from typing import Optional

from spark.domain.model.activity import Activity
from spark.domain.repository.activity import ActivityRepository
from spark.domain.value import ActivityType, UserId


class InMemoryActivityRepository(ActivityRepository):
    """In-memory implementation of ActivityRepository for testing."""

    def __init__(self) -> None:
        self._entries: list[Activity] = []

    async def append(self, activity: Activity) -> Activity:
        self._entries.append(activity)
        return activity

    async def find_by_user(
        self,
        user_id: UserId,
        activity_type: Optional[ActivityType] = None,
        limit: int = 100,
    ) -> list[Activity]:
        entries = [
            a
            for a in reversed(self._entries)
            if a.user_id == user_id
            and (activity_type is None or a.type == activity_type)
        ]
        return entries[:limit]
