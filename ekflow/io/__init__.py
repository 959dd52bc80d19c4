"""Readers that build a `FlowNetwork` from text or YAML descriptions."""

from ekflow.io.loader import load_network
from ekflow.io.parser import (
    ParseDiagnostic,
    ParseResult,
    parse_network,
    parse_network_lines,
)
from ekflow.io.types import NetworkSpec
from ekflow.io.yaml_loader import load_network_yaml

__all__ = [
    "ParseDiagnostic",
    "ParseResult",
    "parse_network",
    "parse_network_lines",
    "NetworkSpec",
    "load_network",
    "load_network_yaml",
]
