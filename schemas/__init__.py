from schemas.event import (
    AffectedNode,
    DatasetNodeUpdated,
    PropagationReport,
    SourceDeleted,
)
from schemas.flow import (
    DeployRequest,
    DeployResponse,
    EdgeSchema,
    FlowCreateRequest,
    FlowListResponse,
    FlowResponse,
    RunItem,
    RunRequest,
    RunResponse,
)
from schemas.health import (
    HealthResponse,
    LivenessResponse,
    ServiceHealthResponse,
)
from schemas.node import (
    ComponentNode,
    ComponentNodeData,
    DatasetConfig,
    DatasetConfigUpdate,
    DatasetNode,
    DatasetNodeData,
    DatasetNodeUpdateRequest,
    Node,
    NodePosition,
    NodeResult,
    NodeStyle,
    NodeUpdateResponse,
)
from schemas.project import ProjectResponse
from schemas.source import (
    ProcessingJob,
    SourceDeleteRequest,
    SourceDeleteResponse,
    SourceProcessRequest,
    SourceResponse,
    SourceUrlRequest,
)

__all__ = [
    "AffectedNode",
    "DatasetNodeUpdated",
    "PropagationReport",
    "SourceDeleted",
    "DeployRequest",
    "DeployResponse",
    "EdgeSchema",
    "FlowCreateRequest",
    "FlowListResponse",
    "FlowResponse",
    "RunItem",
    "RunRequest",
    "RunResponse",
    "HealthResponse",
    "LivenessResponse",
    "ServiceHealthResponse",
    "ComponentNode",
    "ComponentNodeData",
    "DatasetConfig",
    "DatasetConfigUpdate",
    "DatasetNode",
    "DatasetNodeData",
    "DatasetNodeUpdateRequest",
    "Node",
    "NodePosition",
    "NodeResult",
    "NodeStyle",
    "NodeUpdateResponse",
    "ProjectResponse",
    "ProcessingJob",
    "SourceDeleteRequest",
    "SourceDeleteResponse",
    "SourceProcessRequest",
    "SourceResponse",
    "SourceUrlRequest",
]
