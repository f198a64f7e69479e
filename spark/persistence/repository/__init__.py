"""PostgreSQL repository implementations."""

from spark.persistence.repository.activity import PostgresActivityRepository
from spark.persistence.repository.bookmark import PostgresBookmarkRepository
from spark.persistence.repository.comment import PostgresCommentRepository
from spark.persistence.repository.idea import PostgresIdeaRepository
from spark.persistence.repository.preferences import PostgresPreferencesRepository
from spark.persistence.repository.unit_of_work import SqlAlchemyUnitOfWork
from spark.persistence.repository.user import PostgresUserRepository
from spark.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresIdeaRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
    "PostgresBookmarkRepository",
    "PostgresActivityRepository",
    "PostgresPreferencesRepository",
    "SqlAlchemyUnitOfWork",
]
