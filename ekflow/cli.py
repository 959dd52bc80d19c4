"""Command-line interface for ekflow."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

from ekflow.algorithms.edmonds_karp import MaxFlowEngine
from ekflow.algorithms.types import AugmentingPath, FlowSummary
from ekflow.config import EngineConfig, ParserConfig
from ekflow.graph.flow_network import FlowNetwork
from ekflow.io.loader import load_network
from ekflow.logging import get_logger, set_global_log_level
from ekflow.reporting import RecordingReporter

logger = get_logger(__name__)

INDENT = "   "


def _format_table(
    headers: List[str],
    rows: List[List[Any]],
    min_width: int = 8,
    max_col_width: Optional[int] = None,
) -> str:
    """Render ``rows`` under ``headers`` as a left-aligned text table.

    Cells wider than ``max_col_width`` are cut and end in ``...``. An empty
    ``rows`` renders as an empty string.
    """
    if not rows:
        return ""

    def cell(value: Any) -> str:
        text = str(value)
        if max_col_width is None or len(text) <= max_col_width:
            return text
        return text[: max_col_width - 3] + "..."

    table = [[cell(v) for v in row] for row in [headers, *rows]]
    widths = [max(min_width, *(len(c) for c in col)) for col in zip(*table)]

    def render(row: List[str]) -> str:
        return INDENT + " | ".join(c.ljust(w) for c, w in zip(row, widths))

    rule = INDENT + "-+-".join("-" * w for w in widths)
    return "\n".join([render(table[0]), rule, *(render(r) for r in table[1:])])


def _plural(n: int, noun: str) -> str:
    return noun if n == 1 else noun + "s"


def _print_header(title: str) -> None:
    print(f"\n{title}")
    print("-" * 30)


def _print_paths(paths: List[AugmentingPath]) -> None:
    _print_header("AUGMENTING PATHS")
    if not paths:
        print("   (none)")
        return
    running = 0
    rows = []
    for i, path in enumerate(paths, start=1):
        running += path.bottleneck
        rows.append(
            [i, " -> ".join(map(str, path.path_nodes)), path.bottleneck, running]
        )
    print(
        _format_table(
            ["#", "Path", "Bottleneck", "Total"], rows, min_width=3, max_col_width=60
        )
    )


def _print_edges(initial: FlowNetwork, summary: FlowSummary) -> None:
    _print_header("EDGES")
    rows = []
    seen = set()
    for u, edge in initial.edges():
        key = (u, edge.destination)
        if key in seen:
            continue
        seen.add(key)
        rows.append(
            [
                u,
                edge.destination,
                initial.total_capacity(*key),
                summary.edge_flow.get(key, 0),
                summary.residual_cap.get(key, 0),
            ]
        )
    if rows:
        print(
            _format_table(["Source", "Target", "Capacity", "Flow", "Residual"], rows)
        )
    else:
        print("   (no edges)")


def _print_min_cut(initial: FlowNetwork, summary: FlowSummary) -> None:
    _print_header("MINIMUM CUT")
    print(f"   Source side: {sorted(summary.reachable)}")
    rows = [[u, v, initial.total_capacity(u, v)] for u, v in summary.min_cut]
    if rows:
        print(_format_table(["Source", "Target", "Capacity"], rows))
    print(f"   Cut capacity: {summary.min_cut_capacity:,}")


def _run_network(
    path: Path,
    source: Optional[int],
    sink: Optional[int],
    steps: bool,
    detail: bool,
    results_path: Optional[Path],
    stdout: bool,
    strict: bool,
    indexed: bool,
) -> None:
    """Load a network, compute its max flow and print the outcome.

    Args:
        path: Network description (plain text or YAML).
        source: Source override; defaults to the declared source or node 0.
        sink: Sink override; defaults to the declared sink or the last node.
        steps: Whether to print every augmenting path.
        detail: Whether to print per-edge flow and residual capacity.
        results_path: Optional JSON file for the flow summary.
        stdout: Whether to also print the JSON summary to stdout.
        strict: Whether malformed edge lines abort loading.
        indexed: Whether to index edges by node pair.
    """
    logger.info(f"Loading network from: {path}")
    start_time = perf_counter()

    try:
        spec = load_network(path, ParserConfig(strict=strict), indexed=indexed)
        network = spec.network
        src, dst = spec.terminals(source, sink)

        reporter = RecordingReporter()
        engine = MaxFlowEngine(
            network,
            src,
            dst,
            reporter=reporter,
            config=EngineConfig(index_edges=indexed),
        )
        engine.run()
        summary = engine.summary()

        print("=" * 60)
        print("MAXIMUM FLOW")
        print("=" * 60)
        nodes = engine.initial_network.num_nodes
        edges = engine.initial_network.num_edges
        name = spec.name or path.name
        print(
            f"   Network: {name} ({nodes:,} {_plural(nodes, 'node')}, "
            f"{edges:,} {_plural(edges, 'edge')})"
        )
        if spec.diagnostics:
            n = len(spec.diagnostics)
            print(f"   Skipped: {n} malformed {_plural(n, 'line')}")
        print(f"   Source: {src}   Sink: {dst}")
        print(f"   Max flow: {summary.total_flow:,}")
        print(f"   Augmentations: {summary.iterations}")

        if steps:
            _print_paths(reporter.paths)
        if detail:
            _print_edges(engine.initial_network, summary)
        _print_min_cut(engine.initial_network, summary)

        if results_path is not None or stdout:
            json_str = json.dumps(summary.to_dict(), indent=2)
            if results_path is not None:
                results_path.parent.mkdir(parents=True, exist_ok=True)
                logger.info(f"Writing results to: {results_path}")
                results_path.write_text(json_str)
                print(f"✅ Results written to: {results_path}")
            if stdout:
                print(json_str)

        elapsed = perf_counter() - start_time
        logger.info(f"Max-flow run completed in {elapsed:.3f} s")

    except FileNotFoundError:
        logger.error(f"Network file not found: {path}")
        print(f"❌ ERROR: Network file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to run max flow: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to run max flow: {type(e).__name__}: {e}")
        sys.exit(1)


def _inspect_network(path: Path, strict: bool) -> None:
    """Print the adjacency structure of a network and any skipped lines."""
    logger.info(f"Inspecting network: {path}")
    try:
        spec = load_network(path, ParserConfig(strict=strict))
        network = spec.network

        print("=" * 60)
        print("NETWORK INSPECTION")
        print("=" * 60)
        print(f"   Name: {spec.name or path.name}")
        print(f"   Total Nodes: {network.num_nodes:,}")
        print(f"   Total Edges: {network.num_edges:,}")
        if spec.source is not None or spec.sink is not None:
            print(f"   Declared source: {spec.source}   Declared sink: {spec.sink}")

        _print_header("ADJACENCY")
        listing = str(network).rstrip("\n")
        for line in listing.split("\n") if listing else []:
            print(f"   {line}")

        _print_header("DIAGNOSTICS")
        print(f"   Skipped lines: {len(spec.diagnostics)}")
        if spec.diagnostics:
            rows = [[d.line_no, d.reason, d.line] for d in spec.diagnostics]
            print(_format_table(["Line", "Reason", "Text"], rows, max_col_width=48))

    except FileNotFoundError:
        print(f"❌ ERROR: Network file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to inspect network: {e}")
        print("❌ ERROR: Failed to inspect network")
        print(f"  {type(e).__name__}: {e}")
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``ekflow`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="ekflow",
        description="Compute maximum flow with the Edmonds-Karp algorithm.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,inspect}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser("run", help="Compute the maximum flow")
    run_parser.add_argument("network", type=Path, help="Path to network file")
    run_parser.add_argument(
        "--source", "-s", type=int, default=None, help="Source node (default: 0)"
    )
    run_parser.add_argument(
        "--sink", "-t", type=int, default=None, help="Sink node (default: last node)"
    )
    run_parser.add_argument(
        "--steps", action="store_true", help="Print every augmenting path"
    )
    run_parser.add_argument(
        "--detail",
        "-d",
        action="store_true",
        help="Print per-edge capacity, flow and residual capacity",
    )
    run_parser.add_argument(
        "--results",
        "-r",
        type=Path,
        default=None,
        help="Export the flow summary to this JSON file",
    )
    run_parser.add_argument(
        "--stdout", action="store_true", help="Print the JSON flow summary"
    )
    run_parser.add_argument(
        "--indexed",
        action="store_true",
        help="Index edges by node pair for O(1) residual lookups",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Inspect and validate a network file"
    )
    inspect_parser.add_argument("network", type=Path, help="Path to network file")

    for p in (run_parser, inspect_parser):
        p.add_argument(
            "--strict",
            action="store_true",
            help="Fail on malformed edge lines instead of skipping them",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "run":
        _run_network(
            path=args.network,
            source=args.source,
            sink=args.sink,
            steps=args.steps,
            detail=args.detail,
            results_path=args.results,
            stdout=args.stdout,
            strict=args.strict,
            indexed=args.indexed,
        )
    elif args.command == "inspect":
        _inspect_network(args.network, args.strict)


if __name__ == "__main__":
    main()
