"""YAML loader + schema validation for network descriptions.

Example::

    name: classic
    nodes: 6
    source: 0
    sink: 5
    edges:
      - [0, 1, 10]
      - {source: 1, target: 3, capacity: 4}

Unlike the plain-text reader, a YAML description is validated as a whole
against the packaged JSON schema and any problem is fatal.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Dict

import jsonschema
import yaml

from ekflow.errors import InvalidNodeError, NetworkFormatError
from ekflow.graph.flow_network import FlowNetwork
from ekflow.io.types import NetworkSpec
from ekflow.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def _network_schema() -> Dict[str, Any]:
    with (
        resources.files("ekflow.schemas")
        .joinpath("network.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def _require_int(value: Any, location: str) -> None:
    # JSON Schema treats 2.0 as an integer; the network model does not.
    if isinstance(value, bool) or not isinstance(value, int):
        raise NetworkFormatError(f"{location}: expected an integer, got {value!r}")


def load_network_yaml(yaml_str: str, *, indexed: bool = False) -> NetworkSpec:
    """Parse, validate and build a network from a YAML string.

    Args:
        yaml_str: YAML document text.
        indexed: Passed to the ``FlowNetwork`` constructor.

    Returns:
        NetworkSpec: The network with its declared name and terminals.

    Raises:
        NetworkFormatError: If the YAML is not a mapping, fails schema
            validation, or references nodes outside the declared range.
    """
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise NetworkFormatError(f"Invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise NetworkFormatError(
            "The provided YAML must map to a dictionary at top-level."
        )

    try:
        jsonschema.validate(data, _network_schema())
    except jsonschema.ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise NetworkFormatError(
            f"Network schema violation at {location}: {exc.message}"
        ) from exc

    for key in ("nodes", "source", "sink"):
        if key in data:
            _require_int(data[key], key)

    network = FlowNetwork(data["nodes"], indexed=indexed)
    for position, entry in enumerate(data.get("edges", [])):
        if isinstance(entry, dict):
            u, v, capacity = entry["source"], entry["target"], entry["capacity"]
        else:
            u, v, capacity = entry
        for field, value in zip(("source", "target", "capacity"), (u, v, capacity)):
            _require_int(value, f"edges/{position}/{field}")
        if capacity < 0:
            raise NetworkFormatError(f"edges/{position}: negative capacity {capacity}")
        try:
            network.add_edge(u, v, capacity)
        except InvalidNodeError as exc:
            raise NetworkFormatError(f"edges/{position}: {exc}") from exc

    spec = NetworkSpec(
        network=network,
        source=data.get("source"),
        sink=data.get("sink"),
        name=data.get("name"),
    )
    for role in ("source", "sink"):
        node = getattr(spec, role)
        if node is not None and not network.has_node(node):
            error = InvalidNodeError(node, network.num_nodes, role)
            raise NetworkFormatError(str(error))

    logger.debug(
        "Loaded YAML network %r: %d nodes, %d edges",
        spec.name,
        network.num_nodes,
        network.num_edges,
    )
    return spec
