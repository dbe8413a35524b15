from pydantic import BaseModel, ConfigDict, Field


class SourceDeleted(BaseModel):
    model_config = ConfigDict(frozen=True)

    project_id: int = Field(default=...)
    file_name: str = Field(default=...)


class DatasetNodeUpdated(BaseModel):
    model_config = ConfigDict(frozen=True)

    flow_id: int = Field(default=...)
    node_id: str = Field(default=...)


class AffectedNode(BaseModel):
    flow_name: str = Field(default=...)
    node_id: str = Field(default=...)


class PropagationReport(BaseModel):
    affected: list[AffectedNode] = Field(default_factory=list)

    @property
    def node_ids(self) -> list[str]:
        return [node.node_id for node in self.affected]
