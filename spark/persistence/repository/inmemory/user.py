"""In-memory user repository for testing."""

from typing import Optional, Sequence

from spark.domain.model.user import User
from spark.domain.repository.user import UserRepository
from spark.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once."""
        return [self._users[uid] for uid in user_ids if uid in self._users]

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user

    async def increment_karma(self, user_id: UserId, delta: int) -> bool:
        """Add a signed delta to the user's karma."""
        user = self._users.get(user_id)
        if not user:
            return False
        self._users[user_id] = user.model_copy(
            update={"karma_score": user.karma_score + delta}
        )
        return True
