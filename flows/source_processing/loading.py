import logfire
from prefect import task

from db.repositories import SourceFileRepository, SourceRepository
from db.sessions import async_session
from enums import FileSource, SourceStatus
from flows.source_processing.types import SourceProcessData


@task(name="Load Source")
async def _load_source(
    source_id: int, version: int
) -> tuple[SourceProcessData, bytes | None] | None:
    """Load a source and its stored content for processing.

    Args:
        source_id: The source ID.
        version: Processing version the run was submitted for.

    Returns:
        Source context and content, None when the source was deleted or a
        newer processing request superseded this run.

    Raises:
        ValueError: If a local file source has no stored content.

    """
    source_repository = SourceRepository()
    source_file_repository = SourceFileRepository()

    async with async_session() as session:
        source = await source_repository.get_by(session=session, id=source_id)
        if not source or source.version != version:
            logfire.info(
                "Skip superseded processing of source {source_id}",
                source_id=source_id,
                version=version,
            )
            return None

        if source.status != SourceStatus.PROCESSING:
            source = await source_repository.update_by(
                session=session,
                data={
                    "status": SourceStatus.PROCESSING,
                    "message": (
                        f"Processing with {source.partition_method.value} method"
                    ),
                },
                id=source_id,
                version=version,
            )
            if source is None:
                return None

        content = None
        content_type = None
        if source.file_source == FileSource.LOCAL:
            stored = await source_file_repository.get_content(
                session=session, source_id=source_id
            )
            if stored is None:
                await source_repository.update_by(
                    session=session,
                    data={
                        "status": SourceStatus.UNKNOWN,
                        "message": "Stored file content is missing",
                    },
                    id=source_id,
                    version=version,
                )
                msg = f"For source №{source_id} not found file!"
                raise ValueError(msg)

            content, content_type = stored

    return {
        "id": source.id,
        "version": source.version,
        "file_name": source.file_name,
        "file_type": source.file_type,
        "file_source": source.file_source,
        "partition_method": source.partition_method,
        "url": source.url,
        "content_type": content_type,
    }, content
