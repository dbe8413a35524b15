import random
import time
from typing import Any

import httpx
import logfire

from client.models import ApiResult


class ApiClient:
    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        max_retries: int = 3,
        initial_delay: float = 0.5,
        max_delay: float = 8.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize API client.

        Args:
            base_url: API base URL.
            token: Project API token.
            timeout: Request timeout in seconds.
            max_retries: Retries after the first attempt for 5xx and
                transport errors.
            initial_delay: First backoff delay in seconds.
            max_delay: Backoff delay ceiling in seconds.
            transport: Custom httpx transport.

        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self._headers = {"Authorization": f"Bearer {token}"}
        self._transport = transport

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential delay for a retry attempt with up to 25% jitter."""
        delay = min(self.initial_delay * (2**attempt), self.max_delay)
        return delay + delay * random.uniform(0, 0.25)

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        with httpx.Client(
            base_url=self.base_url,
            headers=self._headers,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            return client.request(method=method, url=path, **kwargs)

    @staticmethod
    def _to_result(response: httpx.Response, attempts: int) -> ApiResult:
        payload: Any
        try:
            payload = response.json()
        except ValueError:
            payload = response.text or None

        if response.is_success:
            return ApiResult(
                ok=True,
                status_code=response.status_code,
                data=payload,
                attempts=attempts,
            )

        detail = (
            payload.get("detail", "Unknown error")
            if isinstance(payload, dict)
            else str(payload)
        )
        return ApiResult(
            ok=False,
            status_code=response.status_code,
            detail=detail,
            data=payload,
            attempts=attempts,
        )

    def _request(self, method: str, path: str, **kwargs: Any) -> ApiResult:
        """Perform an HTTP request, retrying server and transport errors.

        Client errors (4xx) are returned at once.
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                response = self._send(method, path, **kwargs)
            except httpx.TransportError as exc:
                if attempt > self.max_retries:
                    return ApiResult(
                        ok=False, status_code=0, detail=str(exc), attempts=attempt
                    )
                reason = str(exc)
            else:
                if (
                    response.status_code < httpx.codes.INTERNAL_SERVER_ERROR
                    or attempt > self.max_retries
                ):
                    return self._to_result(response=response, attempts=attempt)
                reason = f"status {response.status_code}"

            delay = self._backoff_delay(attempt=attempt - 1)
            logfire.warn(
                "Retry {method} {path} in {delay}s: {reason}",
                method=method,
                path=path,
                delay=round(delay, 2),
                reason=reason,
                attempt=attempt,
            )
            time.sleep(delay)

    def liveness(self) -> ApiResult:
        """Check API liveness endpoint."""
        return self._request("GET", "/health/liveness")

    def readiness(self) -> ApiResult:
        """Check API readiness endpoint."""
        return self._request("GET", "/health/readiness")

    def upload_source(
        self, filename: str, file_content: bytes, content_type: str | None = None
    ) -> ApiResult:
        """Upload a new source file."""
        return self._request(
            "POST",
            "/source/upload",
            files={
                "file": (
                    filename,
                    file_content,
                    content_type or "application/octet-stream",
                )
            },
        )

    def upload_url(self, url: str, partition_method: str | None = None) -> ApiResult:
        """Import an external URL as a source."""
        payload: dict[str, Any] = {"url": url}
        if partition_method:
            payload["partition_method"] = partition_method
        return self._request("POST", "/source/upload-url", json=payload)

    def process_source(self, file_name: str, partition_method: str) -> ApiResult:
        """Reprocess a source with another partition method."""
        payload = {"file_name": file_name, "partition_method": partition_method}
        return self._request("POST", "/source/process", json=payload)

    def list_sources(self) -> ApiResult:
        """Fetch all sources of the project."""
        return self._request("GET", "/source")

    def delete_source(self, file_name: str) -> ApiResult:
        """Delete a source by file name."""
        return self._request("DELETE", "/source/delete", json={"file_name": file_name})

    def create_flow(
        self,
        name: str,
        nodes: list[dict[str, Any]],
        edges: list[dict[str, str]],
        description: str | None = None,
    ) -> ApiResult:
        """Create a flow from its node graph."""
        payload = {
            "name": name,
            "description": description,
            "nodes": nodes,
            "edges": edges,
        }
        return self._request("POST", "/flows", json=payload)

    def list_flows(self) -> ApiResult:
        """Fetch all flows of the project."""
        return self._request("GET", "/flows")

    def deploy_flow(
        self, flow_name: str, tool_description: str | None = None
    ) -> ApiResult:
        """Deploy the current node graph of a flow."""
        return self._request(
            "POST",
            f"/flows/{flow_name}/deploy",
            json={"tool_description": tool_description},
        )

    def run_flow(
        self,
        flow_name: str,
        query: str | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> ApiResult:
        """Run the active revision of a flow."""
        payload = {"query": query, "page": page, "page_size": page_size}
        return self._request("POST", f"/flows/{flow_name}", json=payload)

    def get_dataset_nodes(self, flow_name: str) -> ApiResult:
        """Fetch dataset nodes of a flow."""
        return self._request("GET", f"/flows/{flow_name}/datasets")

    def update_dataset_node(
        self, flow_name: str, node_id: str, files: list[str]
    ) -> ApiResult:
        """Replace the files of a dataset node."""
        return self._request(
            "PATCH",
            f"/flows/{flow_name}/datasets/{node_id}",
            json={"config": {"files": files}},
        )
