from enums.flow import FlowStatus, NodeType
from enums.source import FileCategory, FileSource, PartitionMethod, SourceStatus

__all__ = [
    "FileCategory",
    "FileSource",
    "FlowStatus",
    "NodeType",
    "PartitionMethod",
    "SourceStatus",
]
