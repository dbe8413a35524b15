from enum import StrEnum, auto


class FlowStatus(StrEnum):
    NEW = "New"
    NOT_DEPLOYED = "Not deployed"
    DEPLOYED = "Deployed"
    FAILED = "Failed"


class NodeType(StrEnum):
    DATASET = auto()
    CHUNKING = auto()
    RETRIEVAL = auto()
    RERANKING = auto()
    LLM = auto()
    RESPONSE = auto()
