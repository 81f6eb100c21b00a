from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from libs.db.base import Base
from libs.db.config import AsyncSessionLocal, engine


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields an async database session.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_all() -> None:
    """Create every collection table that does not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
