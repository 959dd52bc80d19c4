"""Types and data structures for max-flow results.

Defines immutable records for single augmentations and for the summary of a
completed run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Set, Tuple

from ekflow.graph.flow_network import NodeID

# Ordered node pair (source, destination)
EdgeKey = Tuple[NodeID, NodeID]


@dataclass(frozen=True)
class AugmentingPath:
    """One augmentation applied by the engine.

    Attributes:
        path_nodes: Node indices from source to sink.
        bottleneck: Flow pushed along the path (minimum residual capacity).
    """

    path_nodes: Tuple[NodeID, ...]
    bottleneck: int

    @property
    def edges(self) -> List[EdgeKey]:
        """Consecutive ``(u, v)`` pairs along the path."""
        return list(zip(self.path_nodes, self.path_nodes[1:]))

    def __len__(self) -> int:
        return max(len(self.path_nodes) - 1, 0)

    def __str__(self) -> str:
        return f"{' -> '.join(map(str, self.path_nodes))} (+{self.bottleneck})"

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {"path_nodes": list(self.path_nodes), "bottleneck": self.bottleneck}


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation.

    Captures per-pair flows, residual capacities, the source side of the final
    residual graph and the minimum cut it induces.

    Attributes:
        total_flow: Flow pushed by every run of the engine so far.
        source: Source node index.
        sink: Sink node index.
        edge_flow: Positive net flow per original ``(u, v)`` pair.
        residual_cap: Current capacity per stored ``(u, v)`` pair, reverse
            residual pairs included.
        reachable: Nodes reachable from the source in the residual graph.
        min_cut: Original pairs crossing from ``reachable`` to the rest.
        min_cut_capacity: Sum of original capacities over ``min_cut``.
        paths: Augmentations of the most recent run, in order.
    """

    total_flow: int
    source: NodeID
    sink: NodeID
    edge_flow: Dict[EdgeKey, int]
    residual_cap: Dict[EdgeKey, int]
    reachable: Set[NodeID]
    min_cut: List[EdgeKey]
    min_cut_capacity: int
    paths: Tuple[AugmentingPath, ...] = field(default_factory=tuple)

    @property
    def iterations(self) -> int:
        return len(self.paths)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation.

        Pair-keyed mappings become lists of ``{"source", "target", ...}``
        records since JSON objects cannot be keyed by tuples.
        """
        return {
            "total_flow": self.total_flow,
            "source": self.source,
            "sink": self.sink,
            "iterations": self.iterations,
            "paths": [p.to_dict() for p in self.paths],
            "edge_flow": [
                {"source": u, "target": v, "flow": f}
                for (u, v), f in sorted(self.edge_flow.items())
            ],
            "residual_cap": [
                {"source": u, "target": v, "capacity": c}
                for (u, v), c in sorted(self.residual_cap.items())
            ],
            "reachable": sorted(self.reachable),
            "min_cut": [{"source": u, "target": v} for u, v in self.min_cut],
            "min_cut_capacity": self.min_cut_capacity,
        }
