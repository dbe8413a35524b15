from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Body, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import auth, db, source
from schemas import (
    ProjectResponse,
    SourceDeleteRequest,
    SourceDeleteResponse,
    SourceProcessRequest,
    SourceResponse,
    SourceUrlRequest,
)

router = APIRouter(prefix="/source", tags=["Source"])


@router.post(path="/upload")
async def upload_source(
    background_tasks: BackgroundTasks,
    file: Annotated[UploadFile, File(default=...)],
    project: Annotated[ProjectResponse, Depends(dependency=auth.get_project)],
    session: Annotated[AsyncSession, Depends(dependency=db.get_session)],
    usecase: Annotated[
        source.SourceUsecase, Depends(dependency=source.get_source_usecase)
    ],
) -> SourceResponse:
    source_response, job = await usecase.create_source(
        session=session,
        project=project,
        file=file.file,
        filename=file.filename,
        content_type=file.content_type,
    )

    background_tasks.add_task(usecase.submit_processing, job=job)

    return source_response


@router.post(path="/upload-url")
async def upload_url_source(
    background_tasks: BackgroundTasks,
    data: Annotated[SourceUrlRequest, Body(default=...)],
    project: Annotated[ProjectResponse, Depends(dependency=auth.get_project)],
    session: Annotated[AsyncSession, Depends(dependency=db.get_session)],
    usecase: Annotated[
        source.SourceUsecase, Depends(dependency=source.get_source_usecase)
    ],
) -> SourceResponse:
    source_response, job = await usecase.create_url_source(
        session=session,
        project=project,
        url=str(data.url),
        partition_method=data.partition_method,
    )

    background_tasks.add_task(usecase.submit_processing, job=job)

    return source_response


@router.post(path="/process")
async def process_source(
    background_tasks: BackgroundTasks,
    data: Annotated[SourceProcessRequest, Body(default=...)],
    project: Annotated[ProjectResponse, Depends(dependency=auth.get_project)],
    session: Annotated[AsyncSession, Depends(dependency=db.get_session)],
    usecase: Annotated[
        source.SourceUsecase, Depends(dependency=source.get_source_usecase)
    ],
) -> SourceResponse:
    source_response, job = await usecase.process_source(
        session=session,
        project=project,
        file_name=data.file_name,
        partition_method=data.partition_method,
    )

    background_tasks.add_task(usecase.submit_processing, job=job)

    return source_response


@router.get(path="")
async def get_sources(
    project: Annotated[ProjectResponse, Depends(dependency=auth.get_project)],
    session: Annotated[AsyncSession, Depends(dependency=db.get_session)],
    usecase: Annotated[
        source.SourceUsecase, Depends(dependency=source.get_source_usecase)
    ],
) -> list[SourceResponse]:
    return await usecase.get_sources(session=session, project=project)


@router.get(path="/type/list")
async def get_source_types(
    usecase: Annotated[
        source.SourceUsecase, Depends(dependency=source.get_source_usecase)
    ],
) -> list[str]:
    return usecase.get_supported_file_types()


@router.delete(path="/delete")
async def delete_source(
    data: Annotated[SourceDeleteRequest, Body(default=...)],
    project: Annotated[ProjectResponse, Depends(dependency=auth.get_project)],
    session: Annotated[AsyncSession, Depends(dependency=db.get_session)],
    usecase: Annotated[
        source.SourceUsecase, Depends(dependency=source.get_source_usecase)
    ],
) -> SourceDeleteResponse:
    return await usecase.delete_source(
        session=session, project=project, file_name=data.file_name
    )
