"""Breadth-first search over the residual graph of a `FlowNetwork`."""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Tuple

from ekflow.graph.flow_network import Edge, FlowNetwork, NodeID

# node -> (predecessor node, edge used to reach node)
PredMap = Dict[NodeID, Tuple[NodeID, Edge]]


def bfs(
    network: FlowNetwork,
    src_node: NodeID,
    dst_node: Optional[NodeID] = None,
    stop_at_dst: bool = True,
) -> Tuple[Dict[NodeID, int], PredMap]:
    """
    Breadth-first search along edges with positive residual capacity.

    Each node is labelled once, on first discovery, so the predecessor chain
    from any labelled node back to ``src_node`` is a shortest path by edge
    count. When ``dst_node`` is given and ``stop_at_dst`` is set, the search
    returns as soon as ``dst_node`` is labelled.

    Returns:
        Tuple[Dict[NodeID, int], PredMap]: hop distance from ``src_node`` per
        reached node, and the predecessor node and edge per reached node other
        than ``src_node``.
    """
    dist = {src_node: 0}
    pred: PredMap = {}
    queue = deque([src_node])
    while queue:
        node = queue.popleft()
        for edge in network.neighbors(node):
            neighbor = edge.destination
            if edge.capacity <= 0 or neighbor in dist:
                continue
            dist[neighbor] = dist[node] + 1
            pred[neighbor] = (node, edge)
            if stop_at_dst and neighbor == dst_node:
                return dist, pred
            queue.append(neighbor)
    return dist, pred


def resolve_path(
    pred: PredMap, src_node: NodeID, dst_node: NodeID
) -> List[Tuple[NodeID, Edge]]:
    """Walk predecessors back from ``dst_node`` and return the path edges.

    Returns:
        List[Tuple[NodeID, Edge]]: ``(tail, edge)`` pairs ordered from
        ``src_node`` to ``dst_node``; empty if ``dst_node`` was not reached or
        equals ``src_node``.
    """
    if dst_node == src_node or dst_node not in pred:
        return []
    steps: List[Tuple[NodeID, Edge]] = []
    node = dst_node
    while node != src_node:
        tail, edge = pred[node]
        steps.append((tail, edge))
        node = tail
    steps.reverse()
    return steps
