"""User aggregate root.

Users post ideas and accumulate karma when others vote on their content.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from spark.domain.model.common import DomainModel, utc_now
from spark.domain.value import UserId


class User(DomainModel):
    """User aggregate root.

    karma_score is an incremental ledger maintained by vote transitions,
    so it may go negative.
    """

    id: UserId
    username: str = Field(min_length=1, max_length=50)
    email: Optional[str] = None
    bio: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    karma_score: int = 0
    created_at: datetime = Field(default_factory=utc_now)
