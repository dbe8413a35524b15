from typing import Annotated

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import auth, db, flow
from schemas import (
    DatasetNodeUpdateRequest,
    DeployRequest,
    DeployResponse,
    FlowCreateRequest,
    FlowListResponse,
    FlowResponse,
    Node,
    NodeUpdateResponse,
    ProjectResponse,
    RunRequest,
    RunResponse,
)

router = APIRouter(prefix="/flows", tags=["Flow"])


@router.post(path="")
async def create_flow(
    data: Annotated[FlowCreateRequest, Body(default=...)],
    project: Annotated[ProjectResponse, Depends(dependency=auth.get_project)],
    session: Annotated[AsyncSession, Depends(dependency=db.get_session)],
    usecase: Annotated[
        flow.FlowUsecase, Depends(dependency=flow.get_flow_usecase)
    ],
) -> FlowResponse:
    return await usecase.create_flow(session=session, project=project, data=data)


@router.get(path="")
async def get_flows(
    project: Annotated[ProjectResponse, Depends(dependency=auth.get_project)],
    session: Annotated[AsyncSession, Depends(dependency=db.get_session)],
    usecase: Annotated[
        flow.FlowUsecase, Depends(dependency=flow.get_flow_usecase)
    ],
) -> FlowListResponse:
    return await usecase.get_flows(session=session, project=project)


@router.post(path="/{flow_name}/deploy")
async def deploy_flow(
    flow_name: Annotated[str, Path(default=...)],
    project: Annotated[ProjectResponse, Depends(dependency=auth.get_project)],
    session: Annotated[AsyncSession, Depends(dependency=db.get_session)],
    usecase: Annotated[
        flow.FlowUsecase, Depends(dependency=flow.get_flow_usecase)
    ],
    data: Annotated[DeployRequest | None, Body()] = None,
) -> DeployResponse:
    return await usecase.deploy_flow(
        session=session,
        project=project,
        flow_name=flow_name,
        tool_description=data.tool_description if data else None,
    )


@router.post(path="/{flow_name}")
async def run_flow(
    flow_name: Annotated[str, Path(default=...)],
    project: Annotated[ProjectResponse, Depends(dependency=auth.get_project)],
    session: Annotated[AsyncSession, Depends(dependency=db.get_session)],
    usecase: Annotated[
        flow.FlowUsecase, Depends(dependency=flow.get_flow_usecase)
    ],
    data: Annotated[RunRequest | None, Body()] = None,
) -> RunResponse:
    return await usecase.run_flow(
        session=session,
        project=project,
        flow_name=flow_name,
        data=data or RunRequest(),
    )


@router.get(path="/{flow_name}/datasets")
async def get_dataset_nodes(
    flow_name: Annotated[str, Path(default=...)],
    project: Annotated[ProjectResponse, Depends(dependency=auth.get_project)],
    session: Annotated[AsyncSession, Depends(dependency=db.get_session)],
    usecase: Annotated[
        flow.FlowUsecase, Depends(dependency=flow.get_flow_usecase)
    ],
) -> list[Node]:
    return await usecase.get_dataset_nodes(
        session=session, project=project, flow_name=flow_name
    )


@router.patch(path="/{flow_name}/datasets/{node_id}")
async def update_dataset_node(
    flow_name: Annotated[str, Path(default=...)],
    node_id: Annotated[str, Path(default=...)],
    data: Annotated[DatasetNodeUpdateRequest, Body(default=...)],
    project: Annotated[ProjectResponse, Depends(dependency=auth.get_project)],
    session: Annotated[AsyncSession, Depends(dependency=db.get_session)],
    usecase: Annotated[
        flow.FlowUsecase, Depends(dependency=flow.get_flow_usecase)
    ],
) -> NodeUpdateResponse:
    return await usecase.update_dataset_node(
        session=session,
        project=project,
        flow_name=flow_name,
        node_id=node_id,
        files=data.config.files,
    )
