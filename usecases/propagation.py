from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Flow, FlowNode
from db.repositories import FlowEdgeRepository, FlowNodeRepository, FlowRepository
from enums import NodeType
from schemas import (
    AffectedNode,
    DatasetNodeUpdated,
    PropagationReport,
    SourceDeleted,
)
from utils import key_lock, successors

EMPTY_DATASET_MESSAGE = "All files of this dataset were deleted, select new files"


def mark_stale(node: FlowNode, message: str | None = None) -> None:
    """Flag a node as requiring reprocessing and redeployment.

    Args:
        node: The flow node.
        message: Needs-attention reason to record, if any.

    """
    result = dict(node.result or {})
    result["updated"] = False
    if message is not None:
        result["message"] = message
    node.result = result


class DependencyPropagator:
    """Keep flow node staleness consistent with source and dataset changes.

    Callers hold the key lock of every flow the event can touch, see
    `lock_flows`. The propagator commits the session once, after all nodes
    are updated, together with any pending writes of the caller.
    """

    def __init__(self):
        self._flow_repository = FlowRepository()
        self._flow_node_repository = FlowNodeRepository()
        self._flow_edge_repository = FlowEdgeRepository()

    @asynccontextmanager
    async def lock_flows(
        self, session: AsyncSession, project_id: int
    ) -> AsyncIterator[None]:
        """Hold the key locks of all flows of a project.

        Locks are taken in flow id order.

        Args:
            session: The async session.
            project_id: The project identifier.

        Raises:
            ResourceLockedError: If any flow lock is busy.

        """
        flows = await self._flow_repository.get_all(
            session=session, project_id=project_id
        )

        async with AsyncExitStack() as stack:
            for flow in flows:
                await stack.enter_async_context(
                    key_lock("flow", flow.project_id, flow.name)
                )

            yield

    async def propagate(
        self, session: AsyncSession, event: SourceDeleted | DatasetNodeUpdated
    ) -> PropagationReport:
        """Apply an event to the flow graphs it touches.

        Args:
            session: The async session.
            event: The source or dataset event.

        Returns:
            Report of every node marked stale.

        """
        event_type = type(event).__name__
        with logfire.span("Propagate {event_type}", event_type=event_type):
            if isinstance(event, SourceDeleted):
                report = await self._on_source_deleted(session=session, event=event)
            elif isinstance(event, DatasetNodeUpdated):
                report = await self._on_dataset_node_updated(
                    session=session, event=event
                )
            else:
                msg = f"Unsupported event: {event_type}"
                raise TypeError(msg)

        logfire.info(
            "{event_type} marked {count} nodes stale",
            event_type=event_type,
            count=len(report.affected),
            affected=[node.model_dump() for node in report.affected],
        )

        return report

    async def _mark_successors(
        self, session: AsyncSession, flow: Flow, start_ids: list[str]
    ) -> list[str]:
        """Mark every downstream node of the start nodes stale.

        Returns:
            Successor node ids in topological order.

        """
        nodes = await self._flow_node_repository.get_all(
            session=session, flow_id=flow.id
        )
        edges = await self._flow_edge_repository.get_all(
            session=session, flow_id=flow.id
        )

        successor_ids = successors(
            start_ids=start_ids,
            node_ids=[node.node_id for node in nodes],
            edges=[(edge.source_node_id, edge.target_node_id) for edge in edges],
        )

        nodes_by_id = {node.node_id: node for node in nodes}
        for node_id in successor_ids:
            mark_stale(node=nodes_by_id[node_id])

        return successor_ids

    async def _on_source_deleted(
        self, session: AsyncSession, event: SourceDeleted
    ) -> PropagationReport:
        report = PropagationReport()

        for flow in await self._flow_repository.get_all(
            session=session, project_id=event.project_id
        ):
            dataset_nodes = await self._flow_node_repository.get_all(
                session=session, flow_id=flow.id, type=NodeType.DATASET
            )

            changed_ids = []
            for node in dataset_nodes:
                files = list(node.config.get("files", []))
                if event.file_name not in files:
                    continue

                files = [name for name in files if name != event.file_name]
                node.config = {**node.config, "files": files}
                mark_stale(node=node, message=None if files else EMPTY_DATASET_MESSAGE)
                changed_ids.append(node.node_id)

            if not changed_ids:
                continue

            successor_ids = await self._mark_successors(
                session=session, flow=flow, start_ids=changed_ids
            )
            report.affected.extend(
                AffectedNode(flow_name=flow.name, node_id=node_id)
                for node_id in [*changed_ids, *successor_ids]
            )

        await session.commit()

        return report

    async def _on_dataset_node_updated(
        self, session: AsyncSession, event: DatasetNodeUpdated
    ) -> PropagationReport:
        flow = await self._flow_repository.get_by(session=session, id=event.flow_id)
        if not flow:
            return PropagationReport()

        successor_ids = await self._mark_successors(
            session=session, flow=flow, start_ids=[event.node_id]
        )
        await session.commit()

        return PropagationReport(
            affected=[
                AffectedNode(flow_name=flow.name, node_id=node_id)
                for node_id in [event.node_id, *successor_ids]
            ]
        )
