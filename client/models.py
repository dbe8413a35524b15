from dataclasses import dataclass
from typing import Any

from client.exceptions import ApiClientError


@dataclass
class ApiResult:
    """Result wrapper returned by API client calls."""

    ok: bool
    status_code: int
    data: Any | None = None
    detail: str | None = None
    attempts: int = 1

    def unwrap(self) -> Any:
        """Return the response payload or raise on failure.

        Raises:
            ApiClientError: If the call did not succeed.

        """
        if not self.ok:
            raise ApiClientError(
                status_code=self.status_code, detail=self.detail or "Unknown error"
            )

        return self.data
