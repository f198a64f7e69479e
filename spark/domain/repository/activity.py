"""Activity repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from spark.domain.model.activity import Activity
from spark.domain.value import ActivityType, UserId


class ActivityRepository(ABC):
    """Append-only activity log."""

    @abstractmethod
    async def append(self, activity: Activity) -> Activity:
        """Append an entry to the log.

        Args:
            activity: The entry to append

        Returns:
            The stored entry
        """
        pass

    @abstractmethod
    async def find_by_user(
        self,
        user_id: UserId,
        activity_type: Optional[ActivityType] = None,
        limit: int = 100,
    ) -> List[Activity]:
        """Read a user's log, newest first.

        Args:
            user_id: The user's ID
            activity_type: Only entries of this type (None for all)
            limit: Maximum number of entries to return

        Returns:
            Entries, most recent first
        """
        pass
