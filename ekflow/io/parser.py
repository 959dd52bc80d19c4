"""Plain-text network reader.

Format::

    6
    0 1 10
    0 2 10
    ...

The first non-blank line is the node count. Every later line holds three
whitespace-separated integers ``source destination capacity``. Lines that do
not fit are skipped and recorded as `ParseDiagnostic` entries; the rest of the
file is still read. Text after ``#`` is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ekflow.config import DEFAULT_PARSER_CONFIG, ParserConfig
from ekflow.errors import (
    InvalidNodeError,
    NetworkFileNotFoundError,
    NetworkFormatError,
)
from ekflow.graph.flow_network import FlowNetwork
from ekflow.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ParseDiagnostic:
    """A skipped input line.

    Attributes:
        line_no: 1-based line number in the input.
        line: The raw line text without its trailing newline.
        reason: Why the line was skipped.
    """

    line_no: int
    line: str
    reason: str

    def __str__(self) -> str:
        return f"line {self.line_no}: {self.reason}: {self.line!r}"


@dataclass
class ParseResult:
    """A parsed network plus the lines that were skipped."""

    network: FlowNetwork
    diagnostics: List[ParseDiagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when no line was skipped."""
        return not self.diagnostics


def parse_network_lines(
    lines: Iterable[str],
    config: ParserConfig = DEFAULT_PARSER_CONFIG,
    *,
    indexed: bool = False,
) -> ParseResult:
    """Build a network from text lines.

    Args:
        lines: Input lines, with or without trailing newlines.
        config: Parser configuration.
        indexed: Passed to the ``FlowNetwork`` constructor.

    Returns:
        ParseResult: The network and any diagnostics.

    Raises:
        NetworkFormatError: If the node-count header is missing or invalid,
            or, in strict mode, on the first malformed edge line.
    """
    network: Optional[FlowNetwork] = None
    diagnostics: List[ParseDiagnostic] = []

    for line_no, raw in enumerate(lines, start=1):
        raw = raw.rstrip("\r\n")
        text = raw
        if config.comment_prefix:
            text = text.split(config.comment_prefix, 1)[0]
        tokens = text.split()
        if not tokens:
            continue

        if network is None:
            num_nodes = _parse_header(tokens, line_no, raw)
            network = FlowNetwork(num_nodes, indexed=indexed)
            continue

        reason = _add_edge_line(network, tokens)
        if reason is None:
            continue
        diagnostic = ParseDiagnostic(line_no, raw, reason)
        if config.strict:
            raise NetworkFormatError(f"Malformed edge at {diagnostic}")
        logger.warning("Skipping %s", diagnostic)
        diagnostics.append(diagnostic)

    if network is None:
        raise NetworkFormatError("Network description is empty: missing node count.")

    logger.debug(
        "Parsed network with %d nodes and %d edges (%d lines skipped)",
        network.num_nodes,
        network.num_edges,
        len(diagnostics),
    )
    return ParseResult(network, diagnostics)


def _parse_header(tokens: List[str], line_no: int, raw: str) -> int:
    if len(tokens) != 1:
        raise NetworkFormatError(
            f"line {line_no}: expected a single node count, got {raw!r}."
        )
    try:
        num_nodes = int(tokens[0])
    except ValueError as exc:
        raise NetworkFormatError(
            f"line {line_no}: node count is not an integer: {raw!r}."
        ) from exc
    if num_nodes < 0:
        raise NetworkFormatError(
            f"line {line_no}: node count must be non-negative, got {num_nodes}."
        )
    return num_nodes


def _add_edge_line(network: FlowNetwork, tokens: List[str]) -> Optional[str]:
    """Insert the edge described by ``tokens``; return a skip reason on failure."""
    if len(tokens) != 3:
        return f"expected 3 fields, got {len(tokens)}"
    try:
        u, v, capacity = (int(t) for t in tokens)
    except ValueError:
        return "fields must be integers"
    if capacity < 0:
        return f"negative capacity {capacity}"
    try:
        network.add_edge(u, v, capacity)
    except InvalidNodeError as exc:
        return str(exc)
    return None


def parse_network(
    path: Union[str, Path],
    config: ParserConfig = DEFAULT_PARSER_CONFIG,
    *,
    indexed: bool = False,
) -> ParseResult:
    """Read a network description file.

    Bytes that are not valid UTF-8 are replaced, so the line holding them is
    reported as a diagnostic like any other malformed line.

    Raises:
        NetworkFileNotFoundError: If ``path`` does not exist or is a directory.
        NetworkFormatError: See ``parse_network_lines``.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", errors="replace") as fh:
            result = parse_network_lines(fh, config, indexed=indexed)
    except (FileNotFoundError, IsADirectoryError) as exc:
        raise NetworkFileNotFoundError(f"Network file not found: {path}") from exc
    logger.info(
        "Loaded network from %s: %d nodes, %d edges",
        path,
        result.network.num_nodes,
        result.network.num_edges,
    )
    return result
