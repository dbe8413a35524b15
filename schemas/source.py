from pydantic import BaseModel, Field, HttpUrl

from enums import FileSource, PartitionMethod, SourceStatus


class SourceResponse(BaseModel):
    file_name: str = Field(default=..., description="File name")
    file_size: int = Field(default=..., description="File size in bytes", ge=0)
    file_type: str = Field(default=..., description="File type")
    file_source: FileSource = Field(default=..., description="File source")
    project_id: int = Field(default=..., description="Project ID")
    project_name: str = Field(default=..., description="Project name")
    partition_method: PartitionMethod = Field(
        default=..., description="Partition method"
    )
    status: SourceStatus = Field(default=..., description="Status")
    message: str | None = Field(default=None, description="Status message")


class SourceUrlRequest(BaseModel):
    url: HttpUrl = Field(default=..., description="URL to import")
    partition_method: PartitionMethod | None = Field(
        default=None, description="Partition method"
    )


class SourceProcessRequest(BaseModel):
    file_name: str = Field(default=..., description="File name", min_length=1)
    partition_method: PartitionMethod = Field(
        default=..., description="Partition method"
    )


class SourceDeleteRequest(BaseModel):
    file_name: str = Field(default=..., description="File name", min_length=1)


class SourceDeleteResponse(BaseModel):
    status: str = Field(default="success", description="Status")
    message: str = Field(default=..., description="Message")
    file_name: str = Field(default=..., description="File name")
    project_id: int = Field(default=..., description="Project ID")
    project_name: str = Field(default=..., description="Project name")


class ProcessingJob(BaseModel):
    source_id: int = Field(default=..., description="Source ID", gt=0)
    version: int = Field(default=..., description="Processing version", ge=1)
