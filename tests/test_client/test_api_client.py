import json
from unittest import mock

import httpx
import pytest

from client import ApiClient, ApiClientError


class TestApiClient:
    @pytest.fixture(autouse=True)
    def sleep(self):
        with mock.patch("client.api.time.sleep") as mock_sleep:
            yield mock_sleep

    @staticmethod
    def build_client(responses: list, max_retries: int = 3) -> tuple[ApiClient, list]:
        requests = []
        pending = iter(responses)

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            response = next(pending)
            if isinstance(response, Exception):
                raise response
            return response

        client = ApiClient(
            base_url="http://api.test/",
            token="grlm_token",
            max_retries=max_retries,
            transport=httpx.MockTransport(handler),
        )
        return client, requests

    def test_success(self):
        client, requests = self.build_client(
            responses=[httpx.Response(status_code=200, json=[{"file_name": "a.pdf"}])]
        )

        result = client.list_sources()

        assert result.ok is True
        assert result.data == [{"file_name": "a.pdf"}]
        assert result.attempts == 1
        assert requests[0].url == "http://api.test/source"
        assert requests[0].headers["Authorization"] == "Bearer grlm_token"

    def test_retries_server_errors(self, sleep: mock.Mock):
        client, requests = self.build_client(
            responses=[
                httpx.Response(status_code=503, json={"detail": "busy"}),
                httpx.Response(status_code=500, json={"detail": "boom"}),
                httpx.Response(status_code=200, json={"flows": [], "total": 0}),
            ]
        )

        result = client.list_flows()

        assert result.ok is True
        assert result.attempts == 3
        assert len(requests) == 3
        delays = [call.args[0] for call in sleep.call_args_list]
        assert len(delays) == 2
        assert 0.5 <= delays[0] <= 0.625
        assert 1.0 <= delays[1] <= 1.25

    def test_retries_transport_errors(self):
        client, requests = self.build_client(
            responses=[
                httpx.ConnectError("connection refused"),
                httpx.Response(status_code=200, json={"status": True}),
            ]
        )

        result = client.liveness()

        assert result.ok is True
        assert len(requests) == 2

    def test_gives_up_after_max_retries(self):
        client, requests = self.build_client(
            responses=[
                httpx.Response(status_code=502, text="bad gateway") for _ in range(3)
            ],
            max_retries=2,
        )

        result = client.readiness()

        assert result.ok is False
        assert result.status_code == 502
        assert result.detail == "bad gateway"
        assert len(requests) == 3

    def test_transport_error_after_max_retries(self):
        client, _ = self.build_client(
            responses=[httpx.ConnectError("down") for _ in range(2)], max_retries=1
        )

        result = client.liveness()

        assert result.ok is False
        assert result.status_code == 0
        assert result.detail == "down"

    @pytest.mark.parametrize("status_code", [400, 401, 404, 409, 413])
    def test_client_errors_not_retried(self, status_code: int, sleep: mock.Mock):
        client, requests = self.build_client(
            responses=[httpx.Response(status_code=status_code, json={"detail": "no"})]
        )

        result = client.process_source(file_name="a.pdf", partition_method="ocr")

        assert result.ok is False
        assert result.status_code == status_code
        assert result.detail == "no"
        assert len(requests) == 1
        sleep.assert_not_called()

    def test_unwrap_raises(self):
        client, _ = self.build_client(
            responses=[httpx.Response(status_code=404, json={"detail": "missing"})]
        )

        with pytest.raises(ApiClientError, match="404: missing"):
            client.get_dataset_nodes(flow_name="ghost").unwrap()

    def test_request_payloads(self):
        client, requests = self.build_client(
            responses=[httpx.Response(status_code=200, json={}) for _ in range(3)]
        )

        client.delete_source(file_name="a.pdf")
        client.update_dataset_node(flow_name="bot", node_id="dataset-1", files=["b"])
        client.run_flow(flow_name="bot", query="refund", page=2, page_size=5)

        assert requests[0].method == "DELETE"
        assert json.loads(requests[0].content) == {"file_name": "a.pdf"}
        assert requests[1].method == "PATCH"
        assert requests[1].url.path == "/flows/bot/datasets/dataset-1"
        assert json.loads(requests[1].content) == {"config": {"files": ["b"]}}
        assert json.loads(requests[2].content) == {
            "query": "refund",
            "page": 2,
            "page_size": 5,
        }
