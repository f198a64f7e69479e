"""Repository interfaces for the Spark domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from spark.domain.repository.activity import ActivityRepository
from spark.domain.repository.bookmark import BookmarkRepository
from spark.domain.repository.comment import CommentRepository
from spark.domain.repository.idea import CandidateFilter, IdeaFilter, IdeaRepository
from spark.domain.repository.preferences import PreferencesRepository
from spark.domain.repository.unit_of_work import UnitOfWork
from spark.domain.repository.user import UserRepository
from spark.domain.repository.vote import VoteRepository

__all__ = [
    "ActivityRepository",
    "BookmarkRepository",
    "CandidateFilter",
    "CommentRepository",
    "IdeaFilter",
    "IdeaRepository",
    "PreferencesRepository",
    "UnitOfWork",
    "UserRepository",
    "VoteRepository",
]
