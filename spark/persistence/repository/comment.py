"""PostgreSQL implementation of Comment repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from spark.domain.model import Comment
from spark.domain.repository import CommentRepository
from spark.domain.value import CommentId
from spark.persistence.mappers import comment_to_dict, row_to_comment
from spark.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        existing = await self.find_by_id(comment.id)

        comment_dict = comment_to_dict(comment)

        if existing:
            comment_dict.pop("vote_score")
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = insert(comments_table).values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def increment_vote_score(
        self, comment_id: CommentId, delta: int
    ) -> Optional[int]:
        """Atomically add a signed delta to the comment's vote score."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(vote_score=comments_table.c.vote_score + delta)
            .returning(comments_table.c.vote_score)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.scalar_one_or_none()
