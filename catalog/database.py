"""
Engine, session factory and the unit-of-work helpers.

``unit_of_work`` is the single place that commits: the HTTP layer gets it
through ``get_db`` and the seeder opens one directly.  Services and the
repository only flush.
"""
import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from catalog.config import settings
from catalog.middleware import install_query_counter

logger = logging.getLogger(__name__)

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG, pool_pre_ping=True)
install_query_counter(engine)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


@asynccontextmanager
async def unit_of_work(session_factory: async_sessionmaker[AsyncSession] | None = None):
    """
    Yield a session whose writes are committed together on a clean exit
    and rolled back as a whole if the block raises.
    """
    factory = session_factory or async_session
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.debug("Unit of work rolled back", exc_info=True)
            raise


async def get_db():
    """FastAPI dependency: one unit of work per request."""
    async with unit_of_work() as session:
        yield session
