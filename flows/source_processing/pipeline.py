import logfire
from prefect import flow

from flows.source_processing.completion import (
    _complete_processing_source,
    _fail_processing_source,
)
from flows.source_processing.loading import _load_source
from flows.source_processing.partition import _partition_source


@flow(name="Process Source", timeout_seconds=2 * 3600)
async def process_source(source_id: int, version: int) -> None:
    """Process the source flow: load, partition and complete processing.

    A source whose stored content is missing is left in the Unknown status
    by the load task. Partition and completion errors mark it Failed.
    """
    loaded = await _load_source(source_id=source_id, version=version)
    if loaded is None:
        return

    source_data, content = loaded
    try:
        elements = await _partition_source(source_data=source_data, content=content)

        await _complete_processing_source(
            source_id=source_id, version=version, elements=elements
        )
    except Exception as exc:
        logfire.exception(
            "Processing of source {source_id} failed", source_id=source_id
        )
        await _fail_processing_source(
            source_id=source_id, version=version, reason=f"Processing failed: {exc}"
        )
        raise
