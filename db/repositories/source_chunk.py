from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import SourceChunk
from db.repositories.base import BaseRepository


class SourceChunkRepository(BaseRepository[SourceChunk]):
    def __init__(self):
        super().__init__(model=SourceChunk)

    async def get_for_sources(
        self, session: AsyncSession, source_ids: Iterable[int]
    ) -> list[SourceChunk]:
        """Get chunks of several sources ordered by source and position.

        Args:
            session: The async session.
            source_ids: The source identifiers.

        Returns:
            The list of chunks.

        """
        source_ids = list(source_ids)
        if not source_ids:
            return []

        result = await session.execute(
            statement=select(SourceChunk)
            .where(SourceChunk.source_id.in_(source_ids))
            .order_by(SourceChunk.source_id, SourceChunk.position)
        )
        return list(result.scalars().all())

    async def count_by_source(
        self, session: AsyncSession, source_ids: Iterable[int]
    ) -> dict[int, int]:
        """Count chunks per source.

        Args:
            session: The async session.
            source_ids: The source identifiers.

        Returns:
            Mapping of source identifier to chunk count.

        """
        source_ids = list(source_ids)
        if not source_ids:
            return {}

        result = await session.execute(
            statement=select(SourceChunk.source_id, func.count())
            .where(SourceChunk.source_id.in_(source_ids))
            .group_by(SourceChunk.source_id)
        )
        return {source_id: count for source_id, count in result.all()}

    async def replace_for_source(
        self, session: AsyncSession, source_id: int, data: list[dict]
    ) -> None:
        """Stage replacing all chunks of a source, without committing.

        Args:
            session: The async session.
            source_id: The source identifier.
            data: The new chunk rows.

        """
        await session.execute(
            statement=delete(SourceChunk).where(SourceChunk.source_id == source_id)
        )
        session.add_all([SourceChunk(source_id=source_id, **item) for item in data])
        await session.flush()
