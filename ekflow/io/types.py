"""Records returned by the network readers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ekflow.graph.flow_network import FlowNetwork, NodeID
from ekflow.io.parser import ParseDiagnostic


@dataclass
class NetworkSpec:
    """A loaded network with the terminals and name its description declares.

    Attributes:
        network: The constructed network.
        source: Declared source node, if any.
        sink: Declared sink node, if any.
        name: Optional human-readable name.
        diagnostics: Lines skipped by the text parser (always empty for YAML).
    """

    network: FlowNetwork
    source: Optional[NodeID] = None
    sink: Optional[NodeID] = None
    name: Optional[str] = None
    diagnostics: List[ParseDiagnostic] = field(default_factory=list)

    def terminals(
        self, source: Optional[NodeID] = None, sink: Optional[NodeID] = None
    ) -> Tuple[NodeID, NodeID]:
        """Resolve the terminal pair.

        Explicit arguments win over declared values; without either, the
        first and last node are used.
        """
        last = max(self.network.num_nodes - 1, 0)
        src = source if source is not None else self.source
        dst = sink if sink is not None else self.sink
        return (0 if src is None else src, last if dst is None else dst)
