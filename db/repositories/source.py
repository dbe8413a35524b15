from collections.abc import Iterable

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Source, SourceChunk, SourceFile
from db.repositories.base import BaseRepository


class SourceRepository(BaseRepository[Source]):
    def __init__(self):
        super().__init__(model=Source)

    async def get_by_file_names(
        self, session: AsyncSession, project_id: int, file_names: Iterable[str]
    ) -> list[Source]:
        """Get the project sources whose file name is one of `file_names`.

        Args:
            session: The async session.
            project_id: The project identifier.
            file_names: The file names to look up.

        Returns:
            The matching sources in insertion order.

        """
        return await self.get_all_in(
            session=session,
            column="file_name",
            values=set(file_names),
            project_id=project_id,
        )

    async def delete_cascade(self, session: AsyncSession, source: Source) -> None:
        """Stage deletion of a source with its stored file and chunks.

        The caller commits, so the deletion can share a transaction with the
        flow nodes that referenced the source.

        Args:
            session: The async session.
            source: The source to delete.

        """
        await session.execute(
            statement=delete(SourceChunk).where(SourceChunk.source_id == source.id)
        )
        await session.execute(
            statement=delete(SourceFile).where(SourceFile.source_id == source.id)
        )
        await session.delete(instance=source)

    async def update_fenced(
        self, session: AsyncSession, source_id: int, version: int, data: dict
    ) -> bool:
        """Stage an update that applies only while `version` is current.

        Args:
            session: The async session.
            source_id: The source identifier.
            version: The processing version the writer was started for.
            data: The values to set.

        Returns:
            Whether the source still had the version and was updated.

        """
        result = await session.execute(
            statement=update(Source)
            .where(Source.id == source_id, Source.version == version)
            .values(**data)
        )
        return result.rowcount > 0
