import logfire
from prefect import task

from db.repositories import SourceChunkRepository, SourceRepository
from db.sessions import async_session
from enums import SourceStatus
from flows.source_processing.types import PartitionElement


@task(name="Complete Processing Source")
async def _complete_processing_source(
    source_id: int, version: int, elements: list[PartitionElement]
) -> bool:
    """Replace the chunks of a source and mark it completed.

    The status update is conditional on `version` and the chunk replacement
    shares its transaction, so a superseded run leaves no trace.

    Args:
        source_id: The source ID.
        version: Processing version of this run.
        elements: Partitioned text elements.

    Returns:
        False when the run was superseded and nothing was written.

    """
    source_repository = SourceRepository()
    source_chunk_repository = SourceChunkRepository()

    async with async_session() as session:
        try:
            updated = await source_repository.update_fenced(
                session=session,
                source_id=source_id,
                version=version,
                data={
                    "status": SourceStatus.COMPLETED,
                    "message": f"Processed into {len(elements)} chunks",
                },
            )
            if not updated:
                logfire.info(
                    "Skip superseded completion of source {source_id}",
                    source_id=source_id,
                    version=version,
                )
                return False

            await source_chunk_repository.replace_for_source(
                session=session,
                source_id=source_id,
                data=[
                    {
                        "position": position,
                        "text": element["text"],
                        "page": element["page"],
                    }
                    for position, element in enumerate(elements)
                ],
            )
            await session.commit()
        except Exception:
            await session.rollback()
            raise

    logfire.info(
        "Source {source_id} processed",
        source_id=source_id,
        version=version,
        chunks=len(elements),
    )

    return True


@task(name="Fail Processing Source")
async def _fail_processing_source(source_id: int, version: int, reason: str) -> None:
    """Mark a source as failed unless a newer run superseded this one."""
    async with async_session() as session:
        await SourceRepository().update_fenced(
            session=session,
            source_id=source_id,
            version=version,
            data={"status": SourceStatus.FAILED, "message": reason},
        )
        await session.commit()
