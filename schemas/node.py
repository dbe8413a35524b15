from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from enums import NodeType


class NodePosition(BaseModel):
    x: float = Field(default=0.0)
    y: float = Field(default=0.0)


class NodeStyle(BaseModel):
    width: float | None = Field(default=None)
    height: float | None = Field(default=None)


class NodeResult(BaseModel):
    updated: bool = Field(default=False, description="Up to date with its inputs")
    total_documents: int | None = Field(default=None, ge=0)
    total_chunks: int | None = Field(default=None, ge=0)
    message: str | None = Field(default=None, description="Needs attention reason")


class DatasetConfig(BaseModel):
    files: list[str] = Field(default_factory=list, description="Source file names")


class DatasetNodeData(BaseModel):
    name: str = Field(default=..., min_length=1)
    config: DatasetConfig = Field(default_factory=DatasetConfig)
    result: NodeResult | None = Field(default=None)


class ComponentNodeData(BaseModel):
    name: str = Field(default=..., min_length=1)
    config: dict[str, Any] = Field(default_factory=dict)
    result: NodeResult | None = Field(default=None)


class DatasetNode(BaseModel):
    id: str = Field(default=..., min_length=1)
    type: Literal[NodeType.DATASET] = Field(default=NodeType.DATASET)
    position: NodePosition = Field(default_factory=NodePosition)
    style: NodeStyle = Field(default_factory=NodeStyle)
    data: DatasetNodeData = Field(default=...)


class ComponentNode(BaseModel):
    id: str = Field(default=..., min_length=1)
    type: Literal[
        NodeType.CHUNKING,
        NodeType.RETRIEVAL,
        NodeType.RERANKING,
        NodeType.LLM,
        NodeType.RESPONSE,
    ] = Field(default=...)
    position: NodePosition = Field(default_factory=NodePosition)
    style: NodeStyle = Field(default_factory=NodeStyle)
    data: ComponentNodeData = Field(default=...)


Node = Annotated[DatasetNode | ComponentNode, Field(discriminator="type")]


class DatasetConfigUpdate(BaseModel):
    files: list[str] = Field(default=..., description="Source file names")


class DatasetNodeUpdateRequest(BaseModel):
    config: DatasetConfigUpdate = Field(default=...)


class NodeUpdateResponse(BaseModel):
    success: bool = Field(default=True)
    message: str = Field(default=...)
    node_id: str = Field(default=...)
