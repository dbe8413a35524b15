from pathlib import Path
from typing import BinaryIO
from urllib.parse import urlsplit

import logfire
from prefect.deployments import run_deployment
from sqlalchemy.ext.asyncio import AsyncSession

from constants import FILE_CATEGORIES, URL_FILE_TYPE
from db.models import Source
from db.repositories import SourceFileRepository, SourceRepository
from enums import FileCategory, FileSource, PartitionMethod, SourceStatus
from exceptions import (
    SourceConflictError,
    SourceNotFoundError,
    SourceNotSupportedError,
    SourceTooLargeError,
    SourceValidationError,
)
from flows import deploy_process_source_flow
from schemas import (
    ProcessingJob,
    ProjectResponse,
    SourceDeleted,
    SourceDeleteResponse,
    SourceResponse,
)
from settings import core_settings
from usecases.propagation import DependencyPropagator
from utils import key_lock


class SourceUsecase:
    """Business logic for the per-project source registry."""

    def __init__(self):
        self._source_repository = SourceRepository()
        self._source_file_repository = SourceFileRepository()
        self._propagator = DependencyPropagator()

    @staticmethod
    def _resolve_file_type(filename: str | None) -> tuple[str, FileCategory]:
        """Resolve the file type and category from an uploaded file name.

        Args:
            filename: Uploaded file name with extension.

        Returns:
            Lower-cased extension and its file category.

        Raises:
            SourceNotSupportedError: If extension is missing or not allowed.

        """
        file_type = (
            Path(filename).suffix.lower().removeprefix(".") if filename else None
        )
        if not file_type or file_type not in FILE_CATEGORIES:
            raise SourceNotSupportedError(
                message=f"Unsupported file type: {file_type or 'unknown'}"
            )

        return file_type, FILE_CATEGORIES[file_type]

    @staticmethod
    def _read_content(file: BinaryIO) -> bytes:
        """Read uploaded content, refusing anything above the size limit.

        Args:
            file: Uploaded file stream.

        Returns:
            The file content.

        Raises:
            SourceTooLargeError: If the content exceeds the limit.

        """
        content = file.read(core_settings.max_file_size + 1)
        if len(content) > core_settings.max_file_size:
            raise SourceTooLargeError

        return content

    @staticmethod
    def _to_response(source: Source, project: ProjectResponse) -> SourceResponse:
        return SourceResponse(
            file_name=source.file_name,
            file_size=source.file_size,
            file_type=source.file_type,
            file_source=source.file_source,
            project_id=project.id,
            project_name=project.name,
            partition_method=source.partition_method,
            status=source.status,
            message=source.message,
        )

    async def _ensure_name_is_free(
        self, session: AsyncSession, project_id: int, file_name: str
    ) -> None:
        if await self._source_repository.get_by(
            session=session, project_id=project_id, file_name=file_name
        ):
            raise SourceConflictError(
                message=f"Source {file_name} already exists in this project"
            )

    async def _get_source(
        self, session: AsyncSession, project_id: int, file_name: str
    ) -> Source:
        source = await self._source_repository.get_by(
            session=session, project_id=project_id, file_name=file_name
        )
        if not source:
            raise SourceNotFoundError(message=f"Source {file_name} not found")

        return source

    async def create_source(
        self,
        session: AsyncSession,
        project: ProjectResponse,
        file: BinaryIO,
        filename: str | None,
        content_type: str | None = None,
    ) -> tuple[SourceResponse, ProcessingJob]:
        """Register an uploaded file and persist its content.

        Args:
            session: Database session.
            project: Project owning the source.
            file: Uploaded file stream.
            filename: Uploaded file name.
            content_type: Uploaded MIME type.

        Returns:
            Created source response and the processing job to submit.

        """
        file_type, category = self._resolve_file_type(filename=filename)
        file_name = Path(filename or "").name
        content = self._read_content(file=file)

        async with key_lock("source", project.id, file_name):
            await self._ensure_name_is_free(
                session=session, project_id=project.id, file_name=file_name
            )

            source = await self._source_repository.create(
                session=session,
                data={
                    "project_id": project.id,
                    "file_name": file_name,
                    "file_type": file_type,
                    "file_source": FileSource.LOCAL,
                    "file_size": len(content),
                    "partition_method": category.default_partition_method,
                    "status": SourceStatus.NEW,
                    "message": "Source uploaded",
                },
            )
            await self._source_file_repository.create(
                session=session,
                data={
                    "source_id": source.id,
                    "content_type": content_type,
                    "content": content,
                },
            )

        logfire.info(
            "Source {file_name} uploaded to project {project_id}",
            file_name=file_name,
            project_id=project.id,
            file_size=len(content),
        )

        return (
            self._to_response(source=source, project=project),
            ProcessingJob(source_id=source.id, version=source.version),
        )

    async def create_url_source(
        self,
        session: AsyncSession,
        project: ProjectResponse,
        url: str,
        partition_method: PartitionMethod | None = None,
    ) -> tuple[SourceResponse, ProcessingJob]:
        """Register an external URL (web page, GitHub, YouTube) as a source.

        Args:
            session: Database session.
            project: Project owning the source.
            url: URL to import.
            partition_method: Explicit partition method, if any.

        Returns:
            Created source response and the processing job to submit.

        """
        host = urlsplit(url).hostname
        if not host:
            raise SourceValidationError(message=f"Invalid URL: {url}")

        file_source = FileSource.from_host(host=host)
        if partition_method is None:
            partition_method = (
                PartitionMethod.ADVANCED
                if file_source == FileSource.YOUTUBE
                else PartitionMethod.BASIC
            )

        async with key_lock("source", project.id, url):
            await self._ensure_name_is_free(
                session=session, project_id=project.id, file_name=url
            )

            source = await self._source_repository.create(
                session=session,
                data={
                    "project_id": project.id,
                    "file_name": url,
                    "file_type": URL_FILE_TYPE,
                    "file_source": file_source,
                    "file_size": 0,
                    "url": url,
                    "partition_method": partition_method,
                    "status": SourceStatus.NEW,
                    "message": "Source imported",
                },
            )

        logfire.info(
            "Source {file_name} imported from {file_source}",
            file_name=url,
            file_source=file_source.value,
            project_id=project.id,
        )

        return (
            self._to_response(source=source, project=project),
            ProcessingJob(source_id=source.id, version=source.version),
        )

    async def process_source(
        self,
        session: AsyncSession,
        project: ProjectResponse,
        file_name: str,
        partition_method: PartitionMethod,
    ) -> tuple[SourceResponse, ProcessingJob]:
        """Re-run processing of a source with the given partition method.

        Args:
            session: Database session.
            project: Project owning the source.
            file_name: Source file name.
            partition_method: Partition method to apply.

        Returns:
            Source snapshot with status Processing and the job to submit.

        Raises:
            SourceNotFoundError: If the source does not exist.

        """
        async with key_lock("source", project.id, file_name):
            source = await self._get_source(
                session=session, project_id=project.id, file_name=file_name
            )
            source = await self._source_repository.update_by(
                session=session,
                data={
                    "status": SourceStatus.PROCESSING,
                    "partition_method": partition_method,
                    "message": f"Processing with {partition_method.value} method",
                    "version": source.version + 1,
                },
                id=source.id,
            )

        logfire.info(
            "Source {file_name} submitted for processing",
            file_name=file_name,
            project_id=project.id,
            partition_method=partition_method.value,
            version=source.version,
        )

        return (
            self._to_response(source=source, project=project),
            ProcessingJob(source_id=source.id, version=source.version),
        )

    @staticmethod
    async def submit_processing(job: ProcessingJob) -> None:
        """Submit the Prefect processing flow without waiting for it.

        Args:
            job: Source and version to process.

        """
        await run_deployment(
            name=await deploy_process_source_flow(source_id=job.source_id),
            parameters={"source_id": job.source_id, "version": job.version},
            timeout=0,
        )

    async def get_sources(
        self, session: AsyncSession, project: ProjectResponse
    ) -> list[SourceResponse]:
        """Return all sources of a project in insertion order.

        Args:
            session: Database session.
            project: Project owning the sources.

        Returns:
            List of source responses.

        """
        return [
            self._to_response(source=source, project=project)
            for source in await self._source_repository.get_all(
                session=session, project_id=project.id
            )
        ]

    def get_supported_file_types(self) -> list[str]:
        return sorted(FILE_CATEGORIES)

    async def delete_source(
        self, session: AsyncSession, project: ProjectResponse, file_name: str
    ) -> SourceDeleteResponse:
        """Delete a source and mark dependent flow nodes stale.

        Args:
            session: Database session.
            project: Project owning the source.
            file_name: Source file name.

        Returns:
            Delete confirmation.

        Raises:
            SourceNotFoundError: If source does not exist.

        """
        async with key_lock("source", project.id, file_name):
            source = await self._get_source(
                session=session, project_id=project.id, file_name=file_name
            )

            async with self._propagator.lock_flows(
                session=session, project_id=project.id
            ):
                try:
                    await self._source_repository.delete_cascade(
                        session=session, source=source
                    )
                    report = await self._propagator.propagate(
                        session=session,
                        event=SourceDeleted(project_id=project.id, file_name=file_name),
                    )
                except Exception:
                    await session.rollback()
                    raise

        return SourceDeleteResponse(
            message=(
                f"Source deleted successfully, "
                f"{len(report.affected)} flow nodes marked for redeployment"
            ),
            file_name=file_name,
            project_id=project.id,
            project_name=project.name,
        )
