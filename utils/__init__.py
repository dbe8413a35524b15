from utils.crypto import generate_token, hash_token
from utils.graph import (
    CycleDetectedError,
    UnknownNodeError,
    successors,
    topological_order,
)
from utils.locks import key_lock
from utils.redis import redis_client

__all__ = [
    "generate_token",
    "hash_token",
    "CycleDetectedError",
    "UnknownNodeError",
    "successors",
    "topological_order",
    "key_lock",
    "redis_client",
]
