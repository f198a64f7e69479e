"""SQLAlchemy session-backed unit of work."""

from sqlalchemy.ext.asyncio import AsyncSession

from spark.domain.repository import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Commits the request-scoped session shared by every repository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
