from contextlib import asynccontextmanager
from typing import AsyncIterator
from sqlalchemy.ext.asyncio import AsyncSession

@asynccontextmanager
async def maybe_begin(session: AsyncSession) -> AsyncIterator[None]:
    """Reuse the open transaction if there is one; otherwise open a scoped one."""
    if session.in_transaction():
        yield
    else:
        async with session.begin():
            yield

@asynccontextmanager
async def transactional(session: AsyncSession) -> AsyncIterator[None]:
    """Commit on success, roll back and re-raise on any error."""
    if not session.in_transaction():
        await session.begin()
    try:
        yield
        await session.commit()
    except BaseException:
        await session.rollback()
        raise
