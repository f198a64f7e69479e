"""In-memory repository implementations for testing."""

from .activity import InMemoryActivityRepository
from .bookmark import InMemoryBookmarkRepository
from .comment import InMemoryCommentRepository
from .idea import InMemoryIdeaRepository
from .preferences import InMemoryPreferencesRepository
from .unit_of_work import InMemoryUnitOfWork
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryActivityRepository",
    "InMemoryBookmarkRepository",
    "InMemoryCommentRepository",
    "InMemoryIdeaRepository",
    "InMemoryPreferencesRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
