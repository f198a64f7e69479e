"""PostgreSQL implementation of Bookmark repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from spark.domain.model import Bookmark
from spark.domain.repository import BookmarkRepository
from spark.domain.value import BookmarkId, IdeaId, UserId
from spark.persistence.mappers import row_to_bookmark
from spark.persistence.tables import bookmarks_table


class PostgresBookmarkRepository(BookmarkRepository):
    """PostgreSQL implementation of BookmarkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_idea(
        self, user_id: UserId, idea_id: IdeaId
    ) -> Optional[Bookmark]:
        stmt = select(bookmarks_table).where(
            and_(
                bookmarks_table.c.user_id == user_id,
                bookmarks_table.c.idea_id == idea_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_bookmark(row._asdict()) if row else None

    async def find_idea_ids_by_user(self, user_id: UserId) -> List[IdeaId]:
        stmt = select(bookmarks_table.c.idea_id).where(
            bookmarks_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return [IdeaId(idea_id) for idea_id in result.scalars().all()]

    async def find_by_user_and_ideas(
        self, user_id: UserId, idea_ids: Sequence[IdeaId]
    ) -> List[Bookmark]:
        if not idea_ids:
            return []

        stmt = select(bookmarks_table).where(
            and_(
                bookmarks_table.c.user_id == user_id,
                bookmarks_table.c.idea_id.in_(idea_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_bookmark(row._asdict()) for row in result.fetchall()]

    async def save(self, bookmark: Bookmark) -> Bookmark:
        """Save a bookmark (create) inside a savepoint."""
        stmt = insert(bookmarks_table).values(**bookmark.model_dump())
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return bookmark

    async def delete(self, bookmark_id: BookmarkId) -> bool:
        stmt = delete(bookmarks_table).where(bookmarks_table.c.id == bookmark_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
