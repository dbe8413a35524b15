from typing import TypedDict

from enums import FileSource, PartitionMethod


class SourceProcessData(TypedDict):
    id: int
    version: int
    file_name: str
    file_type: str
    file_source: FileSource
    partition_method: PartitionMethod
    url: str | None
    content_type: str | None


class PartitionElement(TypedDict):
    text: str
    page: int | None
