from tests.factories.flow import FlowFactory
from tests.factories.flow_edge import FlowEdgeFactory
from tests.factories.flow_node import FlowNodeFactory
from tests.factories.flow_revision import FlowRevisionFactory
from tests.factories.project import ProjectFactory
from tests.factories.source import SourceFactory
from tests.factories.source_chunk import SourceChunkFactory
from tests.factories.source_file import SourceFileFactory

__all__ = [
    "FlowFactory",
    "FlowEdgeFactory",
    "FlowNodeFactory",
    "FlowRevisionFactory",
    "ProjectFactory",
    "SourceFactory",
    "SourceChunkFactory",
    "SourceFileFactory",
]
