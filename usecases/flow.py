import math
import uuid
from collections import Counter
from typing import Any

import logfire
from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Flow, FlowNode
from db.repositories import (
    FlowEdgeRepository,
    FlowNodeRepository,
    FlowRepository,
    FlowRevisionRepository,
    SourceChunkRepository,
    SourceRepository,
)
from enums import FlowStatus, NodeType
from exceptions import (
    FilesNotFoundError,
    FlowConflictError,
    FlowNotFoundError,
    FlowValidationError,
    InvalidConfigurationError,
    NodeNotFoundError,
    NoDeployedRevisionError,
)
from schemas import (
    DatasetNode,
    DatasetNodeUpdated,
    DeployResponse,
    FlowCreateRequest,
    FlowListResponse,
    FlowResponse,
    Node,
    NodeUpdateResponse,
    ProjectResponse,
    RunItem,
    RunRequest,
    RunResponse,
)
from settings import core_settings
from usecases.propagation import DependencyPropagator, mark_stale
from utils import CycleDetectedError, UnknownNodeError, key_lock, topological_order

node_adapter: TypeAdapter[Node] = TypeAdapter(Node)


class FlowUsecase:
    """Business logic for flows, their node graphs and deployments."""

    def __init__(self):
        self._flow_repository = FlowRepository()
        self._flow_node_repository = FlowNodeRepository()
        self._flow_edge_repository = FlowEdgeRepository()
        self._flow_revision_repository = FlowRevisionRepository()
        self._source_repository = SourceRepository()
        self._source_chunk_repository = SourceChunkRepository()
        self._propagator = DependencyPropagator()

    @staticmethod
    def _to_node(node: FlowNode) -> Node:
        """Convert a stored node into its typed API variant.

        Args:
            node: The stored flow node.

        Returns:
            The node schema selected by node type.

        """
        return node_adapter.validate_python(
            {
                "id": node.node_id,
                "type": node.type,
                "position": node.position,
                "style": node.style,
                "data": {
                    "name": node.name,
                    "config": node.config,
                    "result": node.result,
                },
            }
        )

    async def _get_flow(
        self, session: AsyncSession, project_id: int, flow_name: str
    ) -> Flow:
        flow = await self._flow_repository.get_by(
            session=session, project_id=project_id, name=flow_name
        )
        if not flow:
            raise FlowNotFoundError(message=f"Flow {flow_name} not found")

        return flow

    async def _find_missing_files(
        self, session: AsyncSession, project_id: int, file_names: list[str]
    ) -> list[str]:
        """Return requested file names that are not sources of the project.

        Args:
            session: The async session.
            project_id: The project identifier.
            file_names: Requested file names.

        Returns:
            Missing file names in request order, without duplicates.

        """
        sources = await self._source_repository.get_by_file_names(
            session=session, project_id=project_id, file_names=file_names
        )
        existing = {source.file_name for source in sources}

        return list(dict.fromkeys(name for name in file_names if name not in existing))

    async def create_flow(
        self, session: AsyncSession, project: ProjectResponse, data: FlowCreateRequest
    ) -> FlowResponse:
        """Create a flow with its node graph.

        Args:
            session: The async session.
            project: Project owning the flow.
            data: Flow definition.

        Returns:
            The created flow.

        Raises:
            FlowConflictError: If the name is taken in the project.
            FlowValidationError: If the node graph is malformed.
            FilesNotFoundError: If dataset nodes reference unknown sources.

        """
        node_ids = [node.id for node in data.nodes]
        duplicates = sorted(
            node_id for node_id, count in Counter(node_ids).items() if count > 1
        )
        if duplicates:
            msg = f"Duplicate node ids: {', '.join(duplicates)}"
            raise FlowValidationError(message=msg)

        edges = [(edge.source, edge.target) for edge in data.edges]
        try:
            topological_order(node_ids=node_ids, edges=edges)
        except (UnknownNodeError, CycleDetectedError) as exc:
            raise FlowValidationError(message=str(exc)) from exc

        missing = await self._find_missing_files(
            session=session,
            project_id=project.id,
            file_names=[
                file_name
                for node in data.nodes
                if isinstance(node, DatasetNode)
                for file_name in node.data.config.files
            ],
        )
        if missing:
            raise FilesNotFoundError(file_names=missing)

        async with key_lock("flow", project.id, data.name):
            if await self._flow_repository.get_by(
                session=session, project_id=project.id, name=data.name
            ):
                raise FlowConflictError(
                    message=f"Flow {data.name} already exists in this project"
                )

            flow = await self._flow_repository.create(
                session=session,
                data={
                    "project_id": project.id,
                    "name": data.name,
                    "description": data.description,
                    "status": FlowStatus.NEW,
                },
            )
            await self._flow_node_repository.create_many(
                session=session,
                data=[
                    {
                        "flow_id": flow.id,
                        "node_id": node.id,
                        "type": node.type,
                        "name": node.data.name,
                        "position": node.position.model_dump(),
                        "style": node.style.model_dump(),
                        "config": node.data.config
                        if isinstance(node.data.config, dict)
                        else node.data.config.model_dump(),
                        "result": node.data.result.model_dump()
                        if node.data.result
                        else {"updated": False},
                    }
                    for node in data.nodes
                ],
            )
            await self._flow_edge_repository.create_many(
                session=session,
                data=[
                    {
                        "flow_id": flow.id,
                        "source_node_id": source,
                        "target_node_id": target,
                    }
                    for source, target in dict.fromkeys(edges)
                ],
            )

        logfire.info(
            "Flow {flow_name} created",
            flow_name=flow.name,
            project_id=project.id,
            nodes=len(data.nodes),
            edges=len(edges),
        )

        return FlowResponse.model_validate(flow)

    async def get_flows(
        self, session: AsyncSession, project: ProjectResponse
    ) -> FlowListResponse:
        """List flows of a project.

        Args:
            session: The async session.
            project: Project owning the flows.

        Returns:
            Flow summaries and their total.

        """
        flows = [
            FlowResponse.model_validate(flow)
            for flow in await self._flow_repository.get_all(
                session=session, project_id=project.id
            )
        ]

        return FlowListResponse(flows=flows, total=len(flows))

    async def get_dataset_nodes(
        self, session: AsyncSession, project: ProjectResponse, flow_name: str
    ) -> list[Node]:
        """Get the dataset nodes of a flow.

        Args:
            session: The async session.
            project: Project owning the flow.
            flow_name: The flow name.

        Returns:
            Dataset nodes in creation order.

        Raises:
            FlowNotFoundError: If the flow does not exist.

        """
        flow = await self._get_flow(
            session=session, project_id=project.id, flow_name=flow_name
        )

        return [
            self._to_node(node=node)
            for node in await self._flow_node_repository.get_all(
                session=session, flow_id=flow.id, type=NodeType.DATASET
            )
        ]

    async def update_dataset_node(
        self,
        session: AsyncSession,
        project: ProjectResponse,
        flow_name: str,
        node_id: str,
        files: list[str],
    ) -> NodeUpdateResponse:
        """Replace the files of a dataset node and mark its successors stale.

        Args:
            session: The async session.
            project: Project owning the flow.
            flow_name: The flow name.
            node_id: The dataset node id.
            files: New source file names, in order.

        Returns:
            Update acknowledgement.

        Raises:
            FlowValidationError: If `files` is empty.
            FilesNotFoundError: If some files are not sources of the project.
            FlowNotFoundError: If the flow does not exist.
            NodeNotFoundError: If the dataset node does not exist.

        """
        if not files:
            raise FlowValidationError(message="files must contain at least one file")

        async with key_lock("flow", project.id, flow_name):
            flow = await self._get_flow(
                session=session, project_id=project.id, flow_name=flow_name
            )
            node = await self._flow_node_repository.get_by(
                session=session, flow_id=flow.id, node_id=node_id, type=NodeType.DATASET
            )
            if not node:
                raise NodeNotFoundError(
                    message=f"Dataset node {node_id} not found in flow {flow_name}"
                )

            missing = await self._find_missing_files(
                session=session, project_id=project.id, file_names=files
            )
            if missing:
                raise FilesNotFoundError(file_names=missing)

            node.config = {**node.config, "files": list(dict.fromkeys(files))}
            mark_stale(node=node)
            node.result = {**node.result, "message": None}
            if flow.status == FlowStatus.NEW:
                flow.status = FlowStatus.NOT_DEPLOYED

            await self._propagator.propagate(
                session=session,
                event=DatasetNodeUpdated(flow_id=flow.id, node_id=node_id),
            )

        return NodeUpdateResponse(
            message="Dataset node updated, redeploy the flow to apply changes",
            node_id=node_id,
        )

    async def _validate_for_deploy(
        self, session: AsyncSession, project_id: int, nodes: list[FlowNode]
    ) -> None:
        if not nodes:
            raise InvalidConfigurationError(message="Flow has no nodes")

        for node in nodes:
            if node.type != NodeType.DATASET:
                continue

            files = node.config.get("files", [])
            if not files:
                msg = f"Dataset node {node.node_id} has no files"
                raise InvalidConfigurationError(message=msg)

            missing = await self._find_missing_files(
                session=session, project_id=project_id, file_names=files
            )
            if missing:
                msg = (
                    f"Dataset node {node.node_id} references missing files: "
                    f"{', '.join(missing)}"
                )
                raise InvalidConfigurationError(message=msg)

    async def _refresh_dataset_results(
        self, session: AsyncSession, project_id: int, nodes: list[FlowNode]
    ) -> None:
        """Mark nodes up to date and recompute dataset totals."""
        for node in nodes:
            result = {**(node.result or {}), "updated": True, "message": None}

            if node.type == NodeType.DATASET:
                files = node.config.get("files", [])
                sources = await self._source_repository.get_by_file_names(
                    session=session, project_id=project_id, file_names=files
                )
                counts = await self._source_chunk_repository.count_by_source(
                    session=session, source_ids=[source.id for source in sources]
                )
                result["total_documents"] = len(sources)
                result["total_chunks"] = sum(counts.values())

            node.result = result

    @staticmethod
    def _build_snapshot(
        nodes: list[FlowNode], edges: list[tuple[str, str]]
    ) -> dict[str, Any]:
        """Snapshot the node graph with fresh node ids.

        Returns:
            Snapshot with nodes, edges and the id mapping.

        """
        id_map = {
            node.node_id: f"{node.type.value}-{uuid.uuid4().hex[:12]}" for node in nodes
        }

        return {
            "nodes": [
                {
                    "id": id_map[node.node_id],
                    "origin_id": node.node_id,
                    "type": node.type.value,
                    "name": node.name,
                    "config": node.config,
                }
                for node in nodes
            ],
            "edges": [
                {"source": id_map[source], "target": id_map[target]}
                for source, target in edges
            ],
        }

    async def deploy_flow(
        self,
        session: AsyncSession,
        project: ProjectResponse,
        flow_name: str,
        tool_description: str | None = None,
    ) -> DeployResponse:
        """Create a new revision of a flow and route all traffic to it.

        Args:
            session: The async session.
            project: Project owning the flow.
            flow_name: The flow name.
            tool_description: Description used when the flow is a tool.

        Returns:
            Deployment result with the new revision id.

        Raises:
            FlowNotFoundError: If the flow does not exist.
            InvalidConfigurationError: If the node graph cannot be deployed.

        """
        async with key_lock("flow", project.id, flow_name):
            flow = await self._get_flow(
                session=session, project_id=project.id, flow_name=flow_name
            )
            nodes = await self._flow_node_repository.get_all(
                session=session, flow_id=flow.id
            )
            edges = [
                (edge.source_node_id, edge.target_node_id)
                for edge in await self._flow_edge_repository.get_all(
                    session=session, flow_id=flow.id
                )
            ]

            try:
                await self._validate_for_deploy(
                    session=session, project_id=project.id, nodes=nodes
                )
            except InvalidConfigurationError as exc:
                if flow.status != FlowStatus.DEPLOYED:
                    flow.status = FlowStatus.FAILED
                    await session.commit()
                logfire.warn(
                    "Flow {flow_name} deployment rejected: {reason}",
                    flow_name=flow_name,
                    reason=exc.message,
                )
                raise

            order = topological_order(
                node_ids=[node.node_id for node in nodes], edges=edges
            )
            nodes_by_id = {node.node_id: node for node in nodes}
            snapshot = self._build_snapshot(
                nodes=[nodes_by_id[node_id] for node_id in order], edges=edges
            )

            for revision in await self._flow_revision_repository.get_all(
                session=session, flow_id=flow.id, is_active=True
            ):
                revision.is_active = False

            await self._refresh_dataset_results(
                session=session, project_id=project.id, nodes=nodes
            )

            flow.revision += 1
            flow.status = FlowStatus.DEPLOYED
            flow.url = core_settings.build_flow_url(flow_name=flow.name)

            revision = await self._flow_revision_repository.create(
                session=session,
                data={
                    "revision_id": str(uuid.uuid4()),
                    "flow_id": flow.id,
                    "number": flow.revision,
                    "snapshot": snapshot,
                    "tool_description": tool_description,
                    "is_active": True,
                },
            )

        logfire.info(
            "Flow {flow_name} deployed as revision {number}",
            flow_name=flow_name,
            number=revision.number,
            revision_id=revision.revision_id,
        )

        return DeployResponse(
            message=f"Flow {flow_name} deployed successfully",
            revision_id=revision.revision_id,
            status=flow.status,
        )

    @staticmethod
    def _match_score(text: str, terms: list[str]) -> int:
        lowered = text.lower()
        return sum(1 for term in terms if term in lowered)

    async def run_flow(
        self,
        session: AsyncSession,
        project: ProjectResponse,
        flow_name: str,
        data: RunRequest,
    ) -> RunResponse:
        """Run the active revision of a deployed flow.

        Args:
            session: The async session.
            project: Project owning the flow.
            flow_name: The flow name.
            data: Query and pagination.

        Returns:
            One page of retrieved items.

        Raises:
            FlowNotFoundError: If the flow does not exist.
            NoDeployedRevisionError: If the flow is not deployed.

        """
        flow = await self._get_flow(
            session=session, project_id=project.id, flow_name=flow_name
        )
        revision = await self._flow_revision_repository.get_by(
            session=session, flow_id=flow.id, is_active=True
        )
        if flow.status != FlowStatus.DEPLOYED or not revision:
            raise NoDeployedRevisionError(
                message=f"Flow {flow_name} has no deployed revision"
            )

        file_names = list(
            dict.fromkeys(
                file_name
                for node in revision.snapshot["nodes"]
                if node["type"] == NodeType.DATASET.value
                for file_name in node["config"].get("files", [])
            )
        )
        sources = await self._source_repository.get_by_file_names(
            session=session, project_id=project.id, file_names=file_names
        )
        sources_by_id = {source.id: source for source in sources}
        file_order = {file_name: index for index, file_name in enumerate(file_names)}

        chunks = await self._source_chunk_repository.get_for_sources(
            session=session, source_ids=list(sources_by_id)
        )
        chunks.sort(
            key=lambda chunk: (
                file_order[sources_by_id[chunk.source_id].file_name],
                chunk.position,
            )
        )

        terms = data.query.lower().split() if data.query else []
        if terms:
            scored = [
                (self._match_score(text=chunk.text, terms=terms), chunk)
                for chunk in chunks
            ]
            chunks = [
                chunk
                for score, chunk in sorted(
                    scored, key=lambda item: item[0], reverse=True
                )
                if score > 0
            ]

        total = len(chunks)
        start = (data.page - 1) * data.page_size
        items = [
            RunItem(
                page_content=chunk.text,
                metadata={
                    "file_name": sources_by_id[chunk.source_id].file_name,
                    "chunk_index": chunk.position,
                    "page": chunk.page,
                    "revision_id": revision.revision_id,
                },
            )
            for chunk in chunks[start : start + data.page_size]
        ]

        return RunResponse(
            items=items,
            total=total,
            page=data.page,
            page_size=data.page_size,
            total_pages=math.ceil(total / data.page_size),
        )
