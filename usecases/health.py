import asyncio
from collections.abc import Awaitable
from http import HTTPStatus

import httpx
import logfire
from sqlalchemy import text

from db.sessions import async_session
from settings import partition_settings, prefect_settings
from utils import redis_client


class HealthUsecase:
    async def check_postgres(self) -> bool:
        """Check postgres connectivity.

        Returns:
            True if postgres is healthy, False otherwise.

        """
        async with async_session() as session:
            await session.execute(text("SELECT 1"))

        return True

    async def check_redis(self) -> bool:
        """Check redis connectivity.

        Returns:
            True if redis answers the ping.

        """
        return bool(await redis_client.ping())

    @staticmethod
    async def _check_http(url: str) -> bool:
        async with httpx.AsyncClient() as client:
            response = await client.get(url, timeout=5.0)

        return response.status_code == HTTPStatus.OK

    async def check_prefect(self) -> bool:
        return await self._check_http(url=f"{prefect_settings.url}/api/health")

    async def check_partition(self) -> bool:
        return await self._check_http(url=f"{partition_settings.url}/health")

    async def health(self) -> dict[str, bool]:
        """Check all services concurrently.

        Returns:
            Dictionary of service names and their health status.

        """
        checks: dict[str, Awaitable[bool]] = {
            "postgres": self.check_postgres(),
            "redis": self.check_redis(),
            "prefect": self.check_prefect(),
            "partition": self.check_partition(),
        }

        results = await asyncio.gather(*checks.values(), return_exceptions=True)

        service_checks = {}
        for service_name, result in zip(checks, results, strict=True):
            if isinstance(result, Exception):
                logfire.warn(
                    "Health check {service_name} failed: {error}",
                    service_name=service_name,
                    error=str(result),
                )
                service_checks[service_name] = False
            else:
                service_checks[service_name] = result

        return service_checks
