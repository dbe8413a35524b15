from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import SourceFile
from db.repositories.base import BaseRepository


class SourceFileRepository(BaseRepository[SourceFile]):
    def __init__(self):
        super().__init__(model=SourceFile)

    async def get_content(
        self, session: AsyncSession, source_id: int
    ) -> tuple[bytes, str | None] | None:
        """Get the stored bytes of a source without loading other columns.

        Args:
            session: The async session.
            source_id: The source identifier.

        Returns:
            The content and its MIME type, None when nothing is stored.

        """
        result = await session.execute(
            statement=select(SourceFile.content, SourceFile.content_type).where(
                SourceFile.source_id == source_id
            )
        )
        row = result.one_or_none()

        return (row.content, row.content_type) if row else None
