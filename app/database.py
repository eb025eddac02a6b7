from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine


class DatabaseHelper:
    """Owns the engine and session factory for one process."""

    def __init__(self, url: str, echo: bool = False):
        self.engine = create_async_engine(url=url, echo=echo)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_db(request: Request) -> DatabaseHelper:
    return request.app.state.db


async def session_dependency(request: Request) -> AsyncIterator[AsyncSession]:
    async with get_db(request).session_factory() as session:
        yield session
