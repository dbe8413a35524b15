from db.models.base import Base
from db.models.flow import Flow
from db.models.flow_edge import FlowEdge
from db.models.flow_node import FlowNode
from db.models.flow_revision import FlowRevision
from db.models.project import Project
from db.models.source import Source
from db.models.source_chunk import SourceChunk
from db.models.source_file import SourceFile

__all__ = [
    "Base",
    "Flow",
    "FlowEdge",
    "FlowNode",
    "FlowRevision",
    "Project",
    "Source",
    "SourceChunk",
    "SourceFile",
]
