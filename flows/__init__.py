from flows.source_processing.completion import (
    _complete_processing_source,
    _fail_processing_source,
)
from flows.source_processing.deployment import deploy_process_source_flow
from flows.source_processing.loading import _load_source
from flows.source_processing.partition import _partition_source
from flows.source_processing.pipeline import process_source

__all__ = [
    "deploy_process_source_flow",
    "process_source",
    "_load_source",
    "_partition_source",
    "_complete_processing_source",
    "_fail_processing_source",
]
