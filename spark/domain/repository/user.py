"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from spark.domain.model.user import User
from spark.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users at once (batch query).

        Args:
            user_ids: User IDs to look up

        Returns:
            Users that exist, in no particular order
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def increment_karma(self, user_id: UserId, delta: int) -> bool:
        """Atomically add a signed delta to the user's karma.

        Karma has no lower bound.

        Args:
            user_id: The user's unique identifier
            delta: Signed amount to add

        Returns:
            True if a user row was updated, False if the user does not exist
        """
        pass
