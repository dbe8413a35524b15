from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from enums import FlowStatus
from schemas.node import Node


class EdgeSchema(BaseModel):
    source: str = Field(default=..., min_length=1, description="Upstream node ID")
    target: str = Field(default=..., min_length=1, description="Downstream node ID")


class FlowCreateRequest(BaseModel):
    name: str = Field(
        default=...,
        description="Flow name, also its URL sub-domain",
        pattern=r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$",
    )
    description: str | None = Field(default=None, description="Description")
    nodes: list[Node] = Field(default_factory=list)
    edges: list[EdgeSchema] = Field(default_factory=list)


class FlowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str = Field(default=..., description="Name")
    description: str | None = Field(default=None, description="Description")
    status: FlowStatus = Field(default=..., description="Status")
    url: str | None = Field(default=None, description="Deployed URL")


class FlowListResponse(BaseModel):
    flows: list[FlowResponse] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)


class DeployRequest(BaseModel):
    tool_description: str | None = Field(
        default=None, description="Description used when the flow is a tool"
    )


class DeployResponse(BaseModel):
    success: bool = Field(default=True)
    message: str = Field(default=...)
    revision_id: str = Field(default=...)
    status: FlowStatus = Field(default=...)


class RunRequest(BaseModel):
    query: str | None = Field(default=None, description="Query")
    page: int = Field(default=1, ge=1, description="Page number")
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"
    )


class RunItem(BaseModel):
    page_content: str = Field(default=...)
    metadata: dict[str, Any] = Field(default_factory=dict)


class RunResponse(BaseModel):
    items: list[RunItem] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    total_pages: int = Field(default=0, ge=0)
