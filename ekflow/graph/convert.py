"""Graph conversion utilities between FlowNetwork and NetworkX graphs.

`to_digraph` consolidates parallel edges into one NetworkX edge whose capacity
is their sum, which is the form `networkx.algorithms.flow` expects.
`from_digraph` goes the other way, assigning dense integer indices to the
NetworkX nodes in iteration order.
"""

from typing import Dict, Hashable, Tuple

import networkx as nx

from ekflow.errors import NetworkFormatError
from ekflow.graph.flow_network import FlowNetwork, NodeID


def to_digraph(
    network: FlowNetwork,
    capacity_attr: str = "capacity",
    skip_zero: bool = False,
) -> nx.DiGraph:
    """Convert a FlowNetwork to a NetworkX DiGraph.

    Args:
        network: The network to convert.
        capacity_attr: Edge attribute that receives the summed capacity.
        skip_zero: If True, omit pairs whose summed capacity is zero (for
            example exhausted residual edges).

    Returns:
        A NetworkX DiGraph over nodes ``0 .. num_nodes - 1``.
    """
    nx_graph = nx.DiGraph()
    nx_graph.add_nodes_from(range(network.num_nodes))

    for u, edge in network.edges():
        v = edge.destination
        if nx_graph.has_edge(u, v):
            nx_graph.edges[u, v][capacity_attr] += edge.capacity
        else:
            nx_graph.add_edge(u, v, **{capacity_attr: edge.capacity})

    if skip_zero:
        empty = [
            (u, v) for u, v, c in nx_graph.edges(data=capacity_attr) if c == 0
        ]
        nx_graph.remove_edges_from(empty)
    return nx_graph


def from_digraph(
    nx_graph: nx.DiGraph,
    capacity_attr: str = "capacity",
    indexed: bool = False,
) -> Tuple[FlowNetwork, Dict[Hashable, NodeID]]:
    """Convert a NetworkX DiGraph to a FlowNetwork.

    Nodes are numbered in the order ``nx_graph.nodes`` yields them.

    Args:
        nx_graph: Source graph. Every edge must carry an integer capacity.
        capacity_attr: Edge attribute holding the capacity.
        indexed: Passed to the ``FlowNetwork`` constructor.

    Returns:
        The new network and the mapping from NetworkX node to index.

    Raises:
        NetworkFormatError: If an edge lacks an integer capacity.
    """
    node_map: Dict[Hashable, NodeID] = {n: i for i, n in enumerate(nx_graph.nodes)}
    network = FlowNetwork(len(node_map), indexed=indexed)

    for u, v, data in nx_graph.edges(data=True):
        capacity = data.get(capacity_attr)
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise NetworkFormatError(
                f"Edge {u!r} -> {v!r} needs an integer '{capacity_attr}' "
                f"attribute, got {capacity!r}."
            )
        network.add_edge(node_map[u], node_map[v], capacity)
    return network, node_map
