from db.repositories.flow import FlowRepository
from db.repositories.flow_edge import FlowEdgeRepository
from db.repositories.flow_node import FlowNodeRepository
from db.repositories.flow_revision import FlowRevisionRepository
from db.repositories.project import ProjectRepository
from db.repositories.source import SourceRepository
from db.repositories.source_chunk import SourceChunkRepository
from db.repositories.source_file import SourceFileRepository

__all__ = [
    "FlowRepository",
    "FlowEdgeRepository",
    "FlowNodeRepository",
    "FlowRevisionRepository",
    "ProjectRepository",
    "SourceRepository",
    "SourceChunkRepository",
    "SourceFileRepository",
]
