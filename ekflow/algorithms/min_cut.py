"""Residual reachability and the s-t cut it induces.

After a max-flow run the nodes still reachable from the source through
positive residual capacity form the source side of a minimum cut. The
capacity of the original edges leaving that side equals the maximum flow.
"""

from __future__ import annotations

from typing import List, Set, Tuple

from ekflow.algorithms.bfs import bfs
from ekflow.algorithms.types import EdgeKey
from ekflow.graph.flow_network import FlowNetwork, NodeID


def residual_reachable(network: FlowNetwork, src_node: NodeID) -> Set[NodeID]:
    """Return the nodes reachable from ``src_node`` over positive capacity."""
    network.validate_node(src_node, "source")
    dist, _ = bfs(network, src_node, stop_at_dst=False)
    return set(dist)


def cut_edges(
    original: FlowNetwork, source_side: Set[NodeID]
) -> Tuple[List[EdgeKey], int]:
    """List original edges leaving ``source_side`` and sum their capacity.

    Only edges with positive original capacity are reported; each ordered pair
    appears once even when parallel edges exist.

    Args:
        original: The network as it was before any flow was pushed.
        source_side: Node set on the source side of the cut.

    Returns:
        Tuple[List[EdgeKey], int]: crossing pairs in node order, and their
        total original capacity.
    """
    pairs: List[EdgeKey] = []
    seen: Set[EdgeKey] = set()
    capacity = 0
    for u, edge in original.edges():
        v = edge.destination
        if u not in source_side or v in source_side or edge.capacity <= 0:
            continue
        capacity += edge.capacity
        if (u, v) not in seen:
            seen.add((u, v))
            pairs.append((u, v))
    return pairs, capacity


def min_cut(
    original: FlowNetwork, residual: FlowNetwork, src_node: NodeID
) -> Tuple[Set[NodeID], List[EdgeKey], int]:
    """Return the residual-reachable set, its crossing edges and cut capacity.

    ``residual`` must be the network after a completed max-flow run and
    ``original`` a snapshot of the same network taken before it.
    """
    reachable = residual_reachable(residual, src_node)
    pairs, capacity = cut_edges(original, reachable)
    return reachable, pairs, capacity
