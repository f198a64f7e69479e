"""Activity log entry.

The activity log is append-only: entries are written as a side effect of
votes and bookmarks and are never updated.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from spark.domain.model.common import DomainModel, utc_now
from spark.domain.value import ActivityId, ActivityType, UserId


class Activity(DomainModel):
    """Single entry in a user's activity log."""

    id: ActivityId
    type: ActivityType
    user_id: UserId
    target_id: UUID
    payload: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utc_now)
