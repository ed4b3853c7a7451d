import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()

Task = Callable[[AsyncSession], Awaitable[Any]]


class Database:
    """Process-wide store handle: one engine, one session factory."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.engine = create_async_engine(url, echo=echo, connect_args=connect_args)
        self.sessionmaker = sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)

    async def init(self):
        # models must be imported so their tables are registered on Base
        import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Opened store at %s", self.url)

    async def close(self):
        await self.engine.dispose()
        logger.info("Closed store at %s", self.url)

    def session(self) -> AsyncSession:
        return self.sessionmaker()

    async def _run(self, task: Task):
        async with self.session() as session:
            return await task(session)

    async def parallel(self, **tasks: Task) -> Dict[str, Any]:
        """Run independent reads concurrently, each on its own session.

        Returns a dict keyed like ``tasks`` once every task has finished.
        The first exception raised by any task propagates to the caller.
        """
        names = list(tasks)
        results = await asyncio.gather(*(self._run(tasks[name]) for name in names))
        return dict(zip(names, results))


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_db(request: Request):
    async with get_database(request).session() as session:
        yield session
