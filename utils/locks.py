from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from redis.exceptions import LockError

from exceptions import ResourceLockedError
from settings import core_settings
from utils.redis import redis_client


def build_lock_name(*parts: object) -> str:
    return ":".join(["lock", *(str(part) for part in parts)])


@asynccontextmanager
async def key_lock(*parts: object) -> AsyncIterator[None]:
    """Serialize mutations of one key across API workers.

    Args:
        *parts: Key parts, e.g. ``("source", project_id, file_name)``.

    Raises:
        ResourceLockedError: If the lock is not acquired in time.

    """
    name = build_lock_name(*parts)
    lock = redis_client.lock(
        name=name,
        timeout=core_settings.lock_timeout,
        blocking_timeout=core_settings.lock_blocking_timeout,
    )

    if not await lock.acquire():
        logfire.warn("Lock {name} is busy", name=name)
        raise ResourceLockedError

    try:
        yield
    finally:
        try:
            await lock.release()
        except LockError:
            # Expired before release; another holder may already own it.
            logfire.warn("Lock {name} expired before release", name=name)
