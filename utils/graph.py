"""Directed graph helpers for flow node graphs.

Nodes are identified by string ids and edges are ``(upstream, downstream)``
pairs. Ordering is deterministic: ties are broken by node id.
"""

import heapq
from collections import defaultdict
from collections.abc import Iterable


class UnknownNodeError(ValueError):
    """An edge references a node id that is not part of the graph."""


class CycleDetectedError(ValueError):
    """The graph contains at least one cycle."""


def _adjacency(
    node_ids: Iterable[str], edges: Iterable[tuple[str, str]]
) -> tuple[set[str], dict[str, set[str]]]:
    nodes = set(node_ids)
    adjacency: dict[str, set[str]] = defaultdict(set)

    for upstream, downstream in edges:
        unknown = {upstream, downstream} - nodes
        if unknown:
            msg = (
                f"Edge {upstream} -> {downstream} references unknown nodes: "
                f"{', '.join(sorted(unknown))}"
            )
            raise UnknownNodeError(msg)
        adjacency[upstream].add(downstream)

    return nodes, adjacency


def topological_order(
    node_ids: Iterable[str], edges: Iterable[tuple[str, str]]
) -> list[str]:
    """Order nodes so that every node comes after all of its upstreams.

    Args:
        node_ids: All node ids of the graph.
        edges: Directed ``(upstream, downstream)`` pairs.

    Returns:
        Node ids in topological order.

    Raises:
        UnknownNodeError: If an edge references a missing node.
        CycleDetectedError: If the graph is not acyclic.

    """
    nodes, adjacency = _adjacency(node_ids=node_ids, edges=edges)

    in_degree = dict.fromkeys(nodes, 0)
    for downstreams in adjacency.values():
        for downstream in downstreams:
            in_degree[downstream] += 1

    ready = [node for node, degree in in_degree.items() if degree == 0]
    heapq.heapify(ready)

    order = []
    while ready:
        node = heapq.heappop(ready)
        order.append(node)
        for downstream in adjacency[node]:
            in_degree[downstream] -= 1
            if in_degree[downstream] == 0:
                heapq.heappush(ready, downstream)

    if len(order) != len(nodes):
        remaining = sorted(node for node, degree in in_degree.items() if degree > 0)
        msg = f"Cycle detected between nodes: {', '.join(remaining)}"
        raise CycleDetectedError(msg)

    return order


def successors(
    start_ids: Iterable[str],
    node_ids: Iterable[str],
    edges: Iterable[tuple[str, str]],
) -> list[str]:
    """Collect every node reachable from the start nodes.

    Args:
        start_ids: Nodes to start from; they are not part of the result.
        node_ids: All node ids of the graph.
        edges: Directed ``(upstream, downstream)`` pairs.

    Returns:
        Transitive successors in topological order.

    """
    edges = list(edges)
    node_ids = list(node_ids)
    _, adjacency = _adjacency(node_ids=node_ids, edges=edges)

    starts = set(start_ids)
    reached: set[str] = set()
    stack = list(starts)
    while stack:
        for downstream in adjacency[stack.pop()]:
            if downstream not in reached:
                reached.add(downstream)
                stack.append(downstream)

    reached -= starts
    return [
        node
        for node in topological_order(node_ids=node_ids, edges=edges)
        if node in reached
    ]
