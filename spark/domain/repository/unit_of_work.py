"""Transaction boundary shared by every repository in a request."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Commits or rolls back the request's storage transaction."""

    @abstractmethod
    async def commit(self) -> None:
        """Make every change made so far in this request durable."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Discard every uncommitted change made in this request."""
        pass
