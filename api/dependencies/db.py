from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from db.sessions import async_session


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for the request.

    Yields:
        The async session.

    """
    async with async_session() as session:
        yield session
