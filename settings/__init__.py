from settings.base import BASE_PATH
from settings.core import core_settings
from settings.partition import partition_settings
from settings.postgres import postgres_settings
from settings.prefect import prefect_settings
from settings.redis import redis_settings

__all__ = [
    "postgres_settings",
    "partition_settings",
    "prefect_settings",
    "core_settings",
    "BASE_PATH",
    "redis_settings",
]
