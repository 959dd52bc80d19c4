"""Integer-indexed directed flow network with mutable residual capacities.

`FlowNetwork` keeps one ordered adjacency list per node. Each list owns the
`Edge` records leaving that node; an edge stores only its destination index
and its current capacity. The same structure serves as the residual graph:
the max-flow engine lowers forward capacities and raises reverse ones in
place, inserting a reverse edge the first time flow crosses a pair.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ekflow.errors import InvalidNodeError
from ekflow.logging import get_logger

logger = get_logger(__name__)

NodeID = int
EdgeTuple = Tuple[NodeID, NodeID, int]


@dataclass(slots=True)
class Edge:
    """A directed edge held in its source node's adjacency list.

    Attributes:
        destination: Index of the node this edge points to.
        capacity: Current residual capacity.
    """

    destination: NodeID
    capacity: int

    def __str__(self) -> str:
        return f"({self.destination}, {self.capacity})"


class FlowNetwork:
    """Directed capacitated network over nodes ``0 .. num_nodes - 1``.

    This class enforces:
      - Node indices are checked on every call that takes one; an index
        outside ``[0, num_nodes)`` raises ``InvalidNodeError``.
      - The node count is fixed at construction.
      - ``find_edge`` returns the first matching edge in insertion order.

    Parallel edges between the same ordered pair are stored as given. They are
    legal for the structure but unusual for callers; lookups by pair only ever
    see the first one.

    Capacities are not domain-checked. A negative capacity is a precondition
    violation for max-flow and is logged at WARNING, never coerced.
    """

    def __init__(self, num_nodes: int, *, indexed: bool = False) -> None:
        """Initialize an empty network.

        Args:
            num_nodes: Number of nodes. Must be non-negative.
            indexed: If True, keep a ``(u, v) -> Edge`` mapping so pair lookups
                are O(1) instead of a linear scan of ``u``'s adjacency list.

        Raises:
            ValueError: If ``num_nodes`` is negative or not an integer.
        """
        if isinstance(num_nodes, bool) or not isinstance(num_nodes, int):
            raise ValueError(f"num_nodes must be an integer, got {num_nodes!r}.")
        if num_nodes < 0:
            raise ValueError(f"num_nodes must be non-negative, got {num_nodes}.")
        self._num_nodes = num_nodes
        self._adj: List[List[Edge]] = [[] for _ in range(num_nodes)]
        self._index: Optional[Dict[Tuple[NodeID, NodeID], Edge]] = (
            {} if indexed else None
        )

    #
    # Node access
    #
    @property
    def num_nodes(self) -> int:
        """Number of nodes in the network."""
        return self._num_nodes

    @property
    def indexed(self) -> bool:
        """Whether pair lookups go through the auxiliary edge index."""
        return self._index is not None

    def __len__(self) -> int:
        return self._num_nodes

    def has_node(self, node: Any) -> bool:
        """Return True if ``node`` is a valid index for this network."""
        return (
            isinstance(node, int)
            and not isinstance(node, bool)
            and 0 <= node < self._num_nodes
        )

    def validate_node(self, node: Any, role: str = "node") -> NodeID:
        """Return ``node`` unchanged if it is valid.

        Args:
            node: Candidate node index.
            role: Name used in the error message (e.g. ``"source"``).

        Raises:
            InvalidNodeError: If ``node`` is outside ``[0, num_nodes)``.
        """
        if not self.has_node(node):
            raise InvalidNodeError(node, self._num_nodes, role)
        return node

    #
    # Edge management
    #
    def add_edge(self, u: NodeID, v: NodeID, capacity: int) -> Edge:
        """Append a directed edge ``u -> v`` to ``u``'s adjacency list.

        Args:
            u: Source node index.
            v: Destination node index.
            capacity: Edge capacity.

        Returns:
            Edge: The newly inserted edge record.

        Raises:
            InvalidNodeError: If ``u`` or ``v`` is out of range.
        """
        self.validate_node(u, "source")
        self.validate_node(v, "destination")
        if capacity < 0:
            logger.warning(
                "Edge %d -> %d has negative capacity %d; max-flow results on "
                "this network are undefined.",
                u,
                v,
                capacity,
            )
        edge = Edge(v, capacity)
        self._adj[u].append(edge)
        if self._index is not None:
            self._index.setdefault((u, v), edge)
        return edge

    def neighbors(self, u: NodeID) -> List[Edge]:
        """Return the live list of edges leaving ``u``.

        The list is not a copy: capacity changes made through it are visible to
        every later read. Callers must not append to it directly.

        Raises:
            InvalidNodeError: If ``u`` is out of range.
        """
        self.validate_node(u)
        return self._adj[u]

    def find_edge(self, u: NodeID, v: NodeID) -> Optional[Edge]:
        """Return the first edge ``u -> v``, or None if there is none.

        Raises:
            InvalidNodeError: If ``u`` or ``v`` is out of range.
        """
        self.validate_node(u, "source")
        self.validate_node(v, "destination")
        if self._index is not None:
            return self._index.get((u, v))
        for edge in self._adj[u]:
            if edge.destination == v:
                return edge
        return None

    def capacity_of(self, u: NodeID, v: NodeID) -> int:
        """Return the capacity of the first edge ``u -> v`` (0 if absent)."""
        edge = self.find_edge(u, v)
        return 0 if edge is None else edge.capacity

    def set_capacity_of(self, u: NodeID, v: NodeID, capacity: int) -> Edge:
        """Set the capacity of the first edge ``u -> v``, inserting it if absent.

        Returns:
            Edge: The updated or inserted edge.
        """
        edge = self.find_edge(u, v)
        if edge is None:
            return self.add_edge(u, v, capacity)
        edge.capacity = capacity
        return edge

    def total_capacity(self, u: NodeID, v: NodeID) -> int:
        """Return the summed capacity of every edge ``u -> v``."""
        self.validate_node(v, "destination")
        return sum(e.capacity for e in self.neighbors(u) if e.destination == v)

    #
    # Convenience methods
    #
    @property
    def num_edges(self) -> int:
        """Total number of stored edges, reverse residual edges included."""
        return sum(len(edges) for edges in self._adj)

    def edges(self) -> Iterator[Tuple[NodeID, Edge]]:
        """Iterate over ``(source, edge)`` for every edge in node order."""
        for u, edges in enumerate(self._adj):
            for edge in edges:
                yield u, edge

    def edge_tuples(self) -> List[EdgeTuple]:
        """Return all edges as ``(u, v, capacity)`` tuples in node order."""
        return [(u, e.destination, e.capacity) for u, e in self.edges()]

    def copy(self) -> FlowNetwork:
        """Return an independent copy; no edge record is shared."""
        clone = FlowNetwork(self._num_nodes, indexed=self.indexed)
        for u, edge in self.edges():
            clone.add_edge(u, edge.destination, edge.capacity)
        return clone

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation.

        Returns:
            Dict[str, Any]: ``{"num_nodes": n, "edges": [[u, v, capacity], ...]}``.
        """
        return {
            "num_nodes": self._num_nodes,
            "edges": [list(t) for t in self.edge_tuples()],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, indexed: bool = False) -> FlowNetwork:
        """Build a network from the form produced by ``to_dict``."""
        network = cls(int(data["num_nodes"]), indexed=indexed)
        for u, v, capacity in data.get("edges", []):
            network.add_edge(int(u), int(v), int(capacity))
        return network

    @classmethod
    def from_edges(
        cls, num_nodes: int, edges: List[EdgeTuple], *, indexed: bool = False
    ) -> FlowNetwork:
        """Build a network from ``(u, v, capacity)`` tuples."""
        network = cls(num_nodes, indexed=indexed)
        for u, v, capacity in edges:
            network.add_edge(u, v, capacity)
        return network

    def __str__(self) -> str:
        lines = [
            f"Node {u}: [{', '.join(str(e) for e in edges)}]"
            for u, edges in enumerate(self._adj)
        ]
        return "\n".join(lines) + ("\n" if lines else "")

    def __repr__(self) -> str:
        return (
            f"FlowNetwork(num_nodes={self._num_nodes}, num_edges={self.num_edges})"
        )
