"""ekflow: maximum flow with the Edmonds-Karp algorithm.

ekflow computes the maximum flow between two nodes of a directed, capacitated
network by repeatedly augmenting along shortest (fewest-edge) residual paths.

Primary API:
    FlowNetwork - integer-indexed network; becomes the residual graph
    MaxFlowEngine - solver bound to a network, source and sink
    calc_max_flow() - one-call functional wrapper
    load_network() - read a network from a text or YAML file

Example:
    from ekflow import FlowNetwork, MaxFlowEngine

    net = FlowNetwork(4)
    net.add_edge(0, 1, 3)
    net.add_edge(0, 2, 2)
    net.add_edge(1, 3, 2)
    net.add_edge(2, 3, 3)

    engine = MaxFlowEngine(net, 0, 3)
    engine.run()             # 4
    engine.paths             # [AugmentingPath((0, 1, 3), 2), ...]
    engine.summary().min_cut
"""

from __future__ import annotations

from ekflow import cli, logging
from ekflow.algorithms.edmonds_karp import (
    MaxFlowEngine,
    calc_max_flow,
    saturated_edges,
)
from ekflow.algorithms.min_cut import min_cut, residual_reachable
from ekflow.algorithms.types import AugmentingPath, FlowSummary
from ekflow.config import EngineConfig, ParserConfig
from ekflow.errors import (
    EkflowError,
    InvalidNodeError,
    NetworkFileNotFoundError,
    NetworkFormatError,
)
from ekflow.graph.flow_network import Edge, FlowNetwork
from ekflow.io import (
    NetworkSpec,
    ParseDiagnostic,
    load_network,
    load_network_yaml,
    parse_network,
    parse_network_lines,
)
from ekflow.reporting import FlowReporter, LoggingReporter, RecordingReporter

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Network
    "Edge",
    "FlowNetwork",
    # Algorithm
    "MaxFlowEngine",
    "calc_max_flow",
    "saturated_edges",
    "min_cut",
    "residual_reachable",
    "AugmentingPath",
    "FlowSummary",
    # Reporting
    "FlowReporter",
    "LoggingReporter",
    "RecordingReporter",
    # IO
    "NetworkSpec",
    "ParseDiagnostic",
    "load_network",
    "load_network_yaml",
    "parse_network",
    "parse_network_lines",
    # Config and errors
    "EngineConfig",
    "ParserConfig",
    "EkflowError",
    "InvalidNodeError",
    "NetworkFileNotFoundError",
    "NetworkFormatError",
    # Modules
    "cli",
    "logging",
]
