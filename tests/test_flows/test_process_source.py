import json
from typing import AsyncGenerator
from unittest import mock
from uuid import uuid4

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from db.repositories import SourceChunkRepository
from enums import FileSource, PartitionMethod, SourceStatus
from flows import (
    _complete_processing_source,
    _fail_processing_source,
    _load_source,
    _partition_source,
    deploy_process_source_flow,
    process_source,
)
from schemas import ProcessingJob
from tests.base import BaseTestCase
from tests.factories import SourceChunkFactory, SourceFactory, SourceFileFactory
from usecases import SourceUsecase

HttpxAsyncClient = httpx.AsyncClient


class ProcessingTestCase(BaseTestCase):
    @pytest_asyncio.fixture(autouse=True)
    async def _mock_async_session(
        self, test_session: AsyncSession
    ) -> AsyncGenerator[mock.Mock, None]:
        mock_context_manager = mock.AsyncMock()
        mock_context_manager.__aenter__.return_value = test_session
        mock_context_manager.__aexit__.return_value = None
        mock_async_session = mock.Mock(return_value=mock_context_manager)

        with (
            mock.patch(
                "flows.source_processing.loading.async_session", mock_async_session
            ),
            mock.patch(
                "flows.source_processing.completion.async_session", mock_async_session
            ),
        ):
            yield mock_async_session


class TestLoadSourceTask(ProcessingTestCase):
    @pytest.mark.asyncio
    async def test_success(self):
        source = await SourceFactory.create_async(
            session=self.session,
            project_id=self.project.id,
            status=SourceStatus.NEW,
            partition_method=PartitionMethod.OCR,
        )
        await SourceFileFactory.create_async(
            session=self.session,
            source_id=source.id,
            content=b"scanned page",
            content_type="image/png",
        )

        source_data, content = await _load_source.fn(source_id=source.id, version=1)

        assert content == b"scanned page"
        assert source_data["file_name"] == source.file_name
        assert source_data["partition_method"] == PartitionMethod.OCR
        assert source_data["content_type"] == "image/png"
        assert source.status == SourceStatus.PROCESSING

    @pytest.mark.asyncio
    async def test_url_source_has_no_content(self):
        source = await SourceFactory.create_async(
            session=self.session,
            project_id=self.project.id,
            file_name="https://github.com/org/repo",
            file_type="url",
            file_source=FileSource.GITHUB,
            url="https://github.com/org/repo",
        )

        source_data, content = await _load_source.fn(source_id=source.id, version=1)

        assert content is None
        assert source_data["url"] == "https://github.com/org/repo"

    @pytest.mark.asyncio
    async def test_superseded_version(self):
        source = await SourceFactory.create_async(
            session=self.session,
            project_id=self.project.id,
            status=SourceStatus.PROCESSING,
            version=3,
        )

        assert await _load_source.fn(source_id=source.id, version=2) is None

    @pytest.mark.asyncio
    async def test_start_is_fenced_by_version(self):
        source = await SourceFactory.create_async(
            session=self.session,
            project_id=self.project.id,
            status=SourceStatus.NEW,
            version=1,
        )

        with mock.patch(
            "flows.source_processing.loading.SourceRepository.update_by",
            new_callable=mock.AsyncMock,
            return_value=None,
        ) as update_by:
            assert await _load_source.fn(source_id=source.id, version=1) is None

        assert update_by.call_args.kwargs["id"] == source.id
        assert update_by.call_args.kwargs["version"] == 1

    @pytest.mark.asyncio
    async def test_deleted_source(self):
        assert await _load_source.fn(source_id=404, version=1) is None

    @pytest.mark.asyncio
    async def test_missing_content_marks_unknown(self):
        source = await SourceFactory.create_async(
            session=self.session, project_id=self.project.id
        )

        with pytest.raises(ValueError, match="not found file"):
            await _load_source.fn(source_id=source.id, version=1)

        assert source.status == SourceStatus.UNKNOWN


class TestPartitionSourceTask:
    def patch_partition_service(self, handler):
        def build_client(**kwargs):
            return HttpxAsyncClient(transport=httpx.MockTransport(handler), **kwargs)

        return mock.patch(
            "flows.source_processing.partition.httpx.AsyncClient",
            side_effect=build_client,
        )

    @staticmethod
    def source_data(**overrides) -> dict:
        return {
            "id": 1,
            "version": 1,
            "file_name": "report.pdf",
            "file_type": "pdf",
            "file_source": FileSource.LOCAL,
            "partition_method": PartitionMethod.BASIC,
            "url": None,
            "content_type": "application/pdf",
            **overrides,
        }

    @pytest.mark.asyncio
    async def test_file_upload(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                status_code=200,
                json={
                    "elements": [
                        {"text": "Title", "page": 1},
                        {"text": "   ", "page": 1},
                        {"text": "Body", "page": 2},
                    ]
                },
            )

        with self.patch_partition_service(handler=handler):
            elements = await _partition_source.fn(
                source_data=self.source_data(), content=b"%PDF"
            )

        assert elements == [{"text": "Title", "page": 1}, {"text": "Body", "page": 2}]
        assert requests[0].url.path == "/partition"
        assert b"report.pdf" in requests[0].content
        assert requests[0].headers["content-type"].startswith("multipart/form-data")

    @pytest.mark.asyncio
    async def test_url(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(status_code=200, json={"elements": []})

        with self.patch_partition_service(handler=handler):
            elements = await _partition_source.fn(
                source_data=self.source_data(
                    file_source=FileSource.YOUTUBE,
                    url="https://youtu.be/abc",
                    partition_method=PartitionMethod.ADVANCED,
                ),
                content=None,
            )

        assert elements == []
        assert json.loads(requests[0].content) == {
            "url": "https://youtu.be/abc",
            "method": "advanced",
        }

    @pytest.mark.asyncio
    async def test_service_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code=422, json={"detail": "bad file"})

        with (
            self.patch_partition_service(handler=handler),
            pytest.raises(httpx.HTTPStatusError),
        ):
            await _partition_source.fn(source_data=self.source_data(), content=b"x")


class TestCompleteProcessingSourceTask(ProcessingTestCase):
    @pytest.mark.asyncio
    async def test_replaces_chunks(self):
        source = await SourceFactory.create_async(
            session=self.session,
            project_id=self.project.id,
            status=SourceStatus.PROCESSING,
            version=2,
        )
        await SourceChunkFactory.create_async(
            session=self.session, source_id=source.id, position=0, text="stale"
        )

        completed = await _complete_processing_source.fn(
            source_id=source.id,
            version=2,
            elements=[{"text": "one", "page": 1}, {"text": "two", "page": None}],
        )

        chunks = await SourceChunkRepository().get_for_sources(
            session=self.session, source_ids=[source.id]
        )
        assert completed is True
        assert [(chunk.position, chunk.text) for chunk in chunks] == [
            (0, "one"),
            (1, "two"),
        ]
        await self.session.refresh(source)
        assert source.status == SourceStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_superseded_writes_nothing(self):
        source = await SourceFactory.create_async(
            session=self.session,
            project_id=self.project.id,
            status=SourceStatus.PROCESSING,
            version=3,
        )
        await SourceChunkFactory.create_async(
            session=self.session, source_id=source.id, position=0, text="kept"
        )

        completed = await _complete_processing_source.fn(
            source_id=source.id, version=2, elements=[{"text": "late", "page": 1}]
        )

        chunks = await SourceChunkRepository().get_for_sources(
            session=self.session, source_ids=[source.id]
        )
        assert completed is False
        assert [chunk.text for chunk in chunks] == ["kept"]
        await self.session.refresh(source)
        assert source.status == SourceStatus.PROCESSING

    @pytest.mark.asyncio
    async def test_superseded_keeps_newer_chunks(self):
        source = await SourceFactory.create_async(
            session=self.session,
            project_id=self.project.id,
            status=SourceStatus.COMPLETED,
            version=2,
        )
        await SourceChunkFactory.create_async(
            session=self.session, source_id=source.id, position=0, text="v2 chunk"
        )

        completed = await _complete_processing_source.fn(
            source_id=source.id, version=1, elements=[{"text": "v1 stale", "page": 1}]
        )

        chunks = await SourceChunkRepository().get_for_sources(
            session=self.session, source_ids=[source.id]
        )
        assert completed is False
        assert [chunk.text for chunk in chunks] == ["v2 chunk"]

    @pytest.mark.asyncio
    async def test_chunk_write_error_keeps_previous_state(self):
        source = await SourceFactory.create_async(
            session=self.session,
            project_id=self.project.id,
            status=SourceStatus.PROCESSING,
            version=1,
        )
        await SourceChunkFactory.create_async(
            session=self.session, source_id=source.id, position=0, text="previous"
        )

        completion = "flows.source_processing.completion"
        with mock.patch(
            f"{completion}.SourceChunkRepository.replace_for_source",
            new_callable=mock.AsyncMock,
            side_effect=RuntimeError("disk full"),
        ):
            with pytest.raises(RuntimeError):
                await _complete_processing_source.fn(
                    source_id=source.id,
                    version=1,
                    elements=[{"text": "new", "page": 1}],
                )

        chunks = await SourceChunkRepository().get_for_sources(
            session=self.session, source_ids=[source.id]
        )
        await self.session.refresh(source)
        assert [chunk.text for chunk in chunks] == ["previous"]
        assert source.status == SourceStatus.PROCESSING

    @pytest.mark.asyncio
    async def test_fail_is_fenced(self):
        source = await SourceFactory.create_async(
            session=self.session,
            project_id=self.project.id,
            status=SourceStatus.PROCESSING,
            version=3,
        )

        await _fail_processing_source.fn(source_id=source.id, version=2, reason="old")
        await self.session.refresh(source)
        assert source.status == SourceStatus.PROCESSING

        await _fail_processing_source.fn(source_id=source.id, version=3, reason="boom")
        await self.session.refresh(source)
        assert source.status == SourceStatus.FAILED
        assert source.message == "boom"


class TestProcessSourceFlow:
    @pytest.fixture
    def tasks(self):
        pipeline = "flows.source_processing.pipeline"
        with (
            mock.patch(f"{pipeline}._load_source", new_callable=mock.AsyncMock) as load,
            mock.patch(
                f"{pipeline}._partition_source", new_callable=mock.AsyncMock
            ) as partition,
            mock.patch(
                f"{pipeline}._complete_processing_source", new_callable=mock.AsyncMock
            ) as complete,
            mock.patch(
                f"{pipeline}._fail_processing_source", new_callable=mock.AsyncMock
            ) as fail,
        ):
            load.return_value = ({"file_name": "a.pdf"}, b"x")
            partition.return_value = [{"text": "a", "page": 1}]
            complete.return_value = True
            yield load, partition, complete, fail

    @pytest.mark.asyncio
    async def test_runs_tasks_in_order(self, tasks):
        _, partition, complete, fail = tasks

        await process_source.fn(source_id=1, version=2)

        partition.assert_awaited_once_with(
            source_data={"file_name": "a.pdf"}, content=b"x"
        )
        complete.assert_awaited_once_with(
            source_id=1, version=2, elements=[{"text": "a", "page": 1}]
        )
        fail.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_superseded_skips(self, tasks):
        load, partition, complete, _ = tasks
        load.return_value = None

        await process_source.fn(source_id=1, version=1)

        partition.assert_not_awaited()
        complete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_partition_error_marks_failed(self, tasks):
        _, partition, complete, fail = tasks
        partition.side_effect = RuntimeError("service down")

        with pytest.raises(RuntimeError, match="service down"):
            await process_source.fn(source_id=1, version=4)

        fail.assert_awaited_once_with(
            source_id=1, version=4, reason="Processing failed: service down"
        )
        complete.assert_not_awaited()


class TestDeployProcessSourceFlow:
    @pytest.mark.asyncio
    async def test_deployment_per_source(self):
        deployment_id = uuid4()
        deployment = mock.MagicMock()
        deployment.deploy = mock.AsyncMock(return_value=deployment_id)

        with mock.patch("flows.source_processing.deployment.flow") as mock_flow:
            mock_flow.from_source = mock.AsyncMock(return_value=deployment)
            assert await deploy_process_source_flow(source_id=7) == deployment_id

        kwargs = deployment.deploy.call_args.kwargs
        assert kwargs["name"] == "PROCESS_SOURCE_7"
        assert kwargs["parameters"] == {"source_id": 7}
        assert kwargs["concurrency_limit"] == 1

    @pytest.mark.asyncio
    async def test_submit_runs_source_deployment(self):
        deployment_id = uuid4()

        with (
            mock.patch(
                "usecases.source.deploy_process_source_flow",
                new_callable=mock.AsyncMock,
                return_value=deployment_id,
            ) as deploy,
            mock.patch(
                "usecases.source.run_deployment", new_callable=mock.AsyncMock
            ) as run,
        ):
            await SourceUsecase.submit_processing(
                job=ProcessingJob(source_id=7, version=3)
            )

        deploy.assert_awaited_once_with(source_id=7)
        run.assert_awaited_once_with(
            name=deployment_id, parameters={"source_id": 7, "version": 3}, timeout=0
        )
