import httpx
import logfire
from prefect import task

from flows.source_processing.types import PartitionElement, SourceProcessData
from settings import partition_settings


def _parse_elements(payload: dict) -> list[PartitionElement]:
    """Keep the non-empty text elements of a partition response."""
    elements = []
    for element in payload.get("elements", []):
        text = str(element.get("text") or "").strip()
        if text:
            elements.append({"text": text, "page": element.get("page")})

    return elements


@task(name="Partition Source")
async def _partition_source(
    source_data: SourceProcessData, content: bytes | None
) -> list[PartitionElement]:
    """Split a source into text elements with the partition service.

    Args:
        source_data: Source context.
        content: Stored file content, None for URL sources.

    Returns:
        Text elements in document order.

    Raises:
        httpx.HTTPStatusError: If the partition service rejects the source.

    """
    method = source_data["partition_method"].value

    with logfire.span(
        "Partition source {file_name}",
        file_name=source_data["file_name"],
        partition_method=method,
    ):
        async with httpx.AsyncClient(
            base_url=partition_settings.url, timeout=partition_settings.timeout
        ) as client:
            if content is None:
                response = await client.post(
                    url="/partition",
                    json={"url": source_data["url"], "method": method},
                )
            else:
                response = await client.post(
                    url="/partition",
                    data={"method": method, "file_type": source_data["file_type"]},
                    files={
                        "file": (
                            source_data["file_name"],
                            content,
                            source_data["content_type"]
                            or "application/octet-stream",
                        )
                    },
                )

        response.raise_for_status()

    return _parse_elements(payload=response.json())
