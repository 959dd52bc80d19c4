"""Maximum-flow computation via Edmonds-Karp augmentation.

Repeatedly finds a shortest augmenting path (by edge count) with a
breadth-first search over positive residual capacity, pushes its bottleneck
along the path and credits the same amount to the reverse residual edges.
Shortest paths bound the number of augmentations by O(V * E), each costing one
O(V + E) search.

The network passed in is mutated into its final residual form. The engine
keeps a copy of the initial capacities so per-edge flows and the minimum cut
can be reported afterwards.
"""

from __future__ import annotations

from typing import Dict, List, Literal, Optional, Tuple, Union, overload

from ekflow.algorithms.bfs import bfs, resolve_path
from ekflow.algorithms.min_cut import min_cut
from ekflow.algorithms.types import AugmentingPath, EdgeKey, FlowSummary
from ekflow.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from ekflow.graph.flow_network import Edge, FlowNetwork, NodeID
from ekflow.logging import get_logger
from ekflow.reporting import FlowReporter

logger = get_logger(__name__)


class MaxFlowEngine:
    """Edmonds-Karp max-flow solver bound to one network and terminal pair.

    Attributes:
        network: The live network; it becomes the residual graph.
        source: Source node index.
        sink: Sink node index.
        max_flow: Total flow pushed by every ``run()`` of this engine.
        paths: Augmentations applied by the most recent ``run()``.
        initial_network: Independent snapshot taken at construction.
    """

    def __init__(
        self,
        network: FlowNetwork,
        source: NodeID,
        sink: NodeID,
        *,
        reporter: Optional[FlowReporter] = None,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    ) -> None:
        """Bind the engine to ``network``.

        Raises:
            InvalidNodeError: If ``source`` or ``sink`` is out of range.
        """
        network.validate_node(source, "source")
        network.validate_node(sink, "sink")
        self.network = network
        self.source = source
        self.sink = sink
        self.reporter = reporter
        self.config = config
        self.max_flow = 0
        self.paths: List[AugmentingPath] = []
        self.initial_network = network.copy()
        self._reverse_cache: Optional[Dict[EdgeKey, Edge]] = (
            {} if config.index_edges else None
        )

    @property
    def iterations(self) -> int:
        """Number of augmentations applied by the most recent run."""
        return len(self.paths)

    def run(self) -> int:
        """Push flow until no augmenting path remains.

        Returns:
            int: Flow added by this call. A second call on a drained network
            returns 0 after zero augmentations.

        Raises:
            InvalidNodeError: If the terminals no longer fit the network.
        """
        self.network.validate_node(self.source, "source")
        self.network.validate_node(self.sink, "sink")
        self.paths = []

        flow = 0
        if self.source == self.sink:
            # The empty path from a node to itself is not an augmenting path.
            logger.debug("Source equals sink (%d); max flow is 0", self.source)
        else:
            flow = self._augment_until_blocked()

        self.max_flow += flow
        logger.debug(
            "Edmonds-Karp %d -> %d finished: flow=%d iterations=%d",
            self.source,
            self.sink,
            flow,
            self.iterations,
        )
        if self.reporter is not None:
            self.reporter.on_complete(flow, self.iterations)
        return flow

    def _augment_until_blocked(self) -> int:
        flow = 0
        limit = self.config.max_iterations
        while True:
            if limit is not None and len(self.paths) >= limit:
                logger.warning(
                    "Stopping after max_iterations=%d augmentations; flow %d may "
                    "not be maximal",
                    limit,
                    flow,
                )
                break

            _, pred = bfs(
                self.network,
                self.source,
                self.sink,
                stop_at_dst=self.config.stop_at_sink,
            )
            steps = resolve_path(pred, self.source, self.sink)
            if not steps:
                # Sink unreachable: normal termination.
                break

            bottleneck = min(edge.capacity for _, edge in steps)
            for tail, edge in steps:
                edge.capacity -= bottleneck
                self._credit_reverse(tail, edge.destination, bottleneck)

            path = AugmentingPath(
                (self.source,) + tuple(edge.destination for _, edge in steps),
                bottleneck,
            )
            self.paths.append(path)
            flow += bottleneck
            logger.debug(
                "Augmentation %d: %s bottleneck=%d",
                len(self.paths),
                path,
                bottleneck,
            )
            if self.reporter is not None:
                self.reporter.on_augment(len(self.paths), path)
        return flow

    def _credit_reverse(self, u: NodeID, v: NodeID, amount: int) -> None:
        """Raise the capacity of ``v -> u`` by ``amount``, inserting it if absent."""
        cache = self._reverse_cache
        edge = cache.get((v, u)) if cache is not None else None
        if edge is None:
            edge = self.network.find_edge(v, u)
            if edge is None:
                edge = self.network.add_edge(v, u, 0)
            if cache is not None:
                cache[(v, u)] = edge
        edge.capacity += amount

    #
    # Reporting
    #
    def flow_on(self, u: NodeID, v: NodeID) -> int:
        """Net flow pushed ``u -> v`` since construction.

        Positive when flow moves ``u -> v``, negative when it moves ``v -> u``.
        """
        before = self.initial_network.total_capacity(u, v)
        return before - self.network.total_capacity(u, v)

    def edge_flows(self) -> Dict[EdgeKey, int]:
        """Positive net flow per original pair."""
        flows: Dict[EdgeKey, int] = {}
        for u, edge in self.initial_network.edges():
            key = (u, edge.destination)
            if key in flows or edge.capacity <= 0:
                continue
            f = self.flow_on(*key)
            if f > 0:
                flows[key] = f
        return flows

    def residual_capacities(self) -> Dict[EdgeKey, int]:
        """Current capacity per stored pair, summed over parallel edges."""
        residual: Dict[EdgeKey, int] = {}
        for u, edge in self.network.edges():
            key = (u, edge.destination)
            residual[key] = residual.get(key, 0) + edge.capacity
        return residual

    def summary(self) -> FlowSummary:
        """Build a ``FlowSummary`` from the current residual state.

        ``total_flow`` is ``max_flow``, the flow pushed by every run so far,
        and the min cut reflects the same cumulative state. ``paths`` and
        ``iterations`` cover only the most recent ``run()``, so a summary taken
        after re-running a drained network reports the full flow with zero
        iterations.
        """
        reachable, cut, cut_capacity = min_cut(
            self.initial_network, self.network, self.source
        )
        return FlowSummary(
            total_flow=self.max_flow,
            source=self.source,
            sink=self.sink,
            edge_flow=self.edge_flows(),
            residual_cap=self.residual_capacities(),
            reachable=reachable,
            min_cut=cut,
            min_cut_capacity=cut_capacity,
            paths=tuple(self.paths),
        )


@overload
def calc_max_flow(
    network: FlowNetwork,
    source: NodeID,
    sink: NodeID,
    *,
    return_summary: Literal[False] = False,
    return_network: Literal[False] = False,
    copy_network: bool = True,
    reporter: Optional[FlowReporter] = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> int: ...


@overload
def calc_max_flow(
    network: FlowNetwork,
    source: NodeID,
    sink: NodeID,
    *,
    return_summary: Literal[True],
    return_network: Literal[False] = False,
    copy_network: bool = True,
    reporter: Optional[FlowReporter] = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> Tuple[int, FlowSummary]: ...


@overload
def calc_max_flow(
    network: FlowNetwork,
    source: NodeID,
    sink: NodeID,
    *,
    return_summary: Literal[False] = False,
    return_network: Literal[True],
    copy_network: bool = True,
    reporter: Optional[FlowReporter] = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> Tuple[int, FlowNetwork]: ...


@overload
def calc_max_flow(
    network: FlowNetwork,
    source: NodeID,
    sink: NodeID,
    *,
    return_summary: Literal[True],
    return_network: Literal[True],
    copy_network: bool = True,
    reporter: Optional[FlowReporter] = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> Tuple[int, FlowSummary, FlowNetwork]: ...


def calc_max_flow(
    network: FlowNetwork,
    source: NodeID,
    sink: NodeID,
    *,
    return_summary: bool = False,
    return_network: bool = False,
    copy_network: bool = True,
    reporter: Optional[FlowReporter] = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> Union[int, tuple]:
    """Compute the maximum flow from ``source`` to ``sink``.

    Args:
        network: Network to analyze.
        source: Source node index.
        sink: Sink node index.
        return_summary: If True, also return a ``FlowSummary``.
        return_network: If True, also return the residual network.
        copy_network: If True, run on a copy so ``network`` is left untouched.
        reporter: Optional progress sink.
        config: Engine configuration.

    Returns:
        Union[int, tuple]:
            - If neither flag: ``int`` total flow.
            - Otherwise a tuple of the total flow followed by the summary
              and/or the residual network, in that order.

    Raises:
        InvalidNodeError: If ``source`` or ``sink`` is out of range.

    Examples:
        >>> net = FlowNetwork(3)
        >>> _ = net.add_edge(0, 1, 10)
        >>> _ = net.add_edge(1, 2, 5)
        >>> calc_max_flow(net, 0, 2)
        5
    """
    work = network.copy() if copy_network else network
    engine = MaxFlowEngine(work, source, sink, reporter=reporter, config=config)
    total = engine.run()

    if not (return_summary or return_network):
        return total
    ret: list = [total]
    if return_summary:
        ret.append(engine.summary())
    if return_network:
        ret.append(work)
    return tuple(ret)


def saturated_edges(
    network: FlowNetwork,
    source: NodeID,
    sink: NodeID,
    **kwargs,
) -> List[EdgeKey]:
    """Identify original pairs left with no forward residual capacity.

    Args:
        network: The network to analyze; it is not modified.
        source: Source node index.
        sink: Sink node index.
        **kwargs: Additional arguments passed to ``calc_max_flow``.

    Returns:
        List[EdgeKey]: Pairs ``(u, v)`` with positive original capacity and
        zero remaining capacity after a max-flow run.
    """
    kwargs.pop("copy_network", None)
    _, residual = calc_max_flow(
        network, source, sink, return_network=True, copy_network=True, **kwargs
    )
    saturated: List[EdgeKey] = []
    for u, edge in network.edges():
        key = (u, edge.destination)
        if edge.capacity > 0 and key not in saturated:
            if residual.total_capacity(*key) <= 0:
                saturated.append(key)
    return saturated
