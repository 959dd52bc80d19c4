import pytest

from ekflow.algorithms.edmonds_karp import MaxFlowEngine, calc_max_flow, saturated_edges
from ekflow.algorithms.types import AugmentingPath, FlowSummary
from ekflow.config import EngineConfig
from ekflow.errors import InvalidNodeError
from ekflow.graph.flow_network import FlowNetwork
from ekflow.reporting import RecordingReporter


class TestMaxFlowBasic:
    """
    Tests that directly verify flow values on known small networks.
    """

    def test_classic_network(self, classic6):
        engine = MaxFlowEngine(classic6, 0, 5)
        assert engine.run() == 19
        assert engine.max_flow == 19

    def test_classic_network_paths(self, classic6):
        engine = MaxFlowEngine(classic6, 0, 5)
        engine.run()
        assert engine.paths == [
            AugmentingPath((0, 1, 3, 5), 4),
            AugmentingPath((0, 1, 4, 5), 6),
            AugmentingPath((0, 2, 4, 5), 4),
            AugmentingPath((0, 2, 4, 3, 5), 5),
        ]
        assert engine.iterations == 4

    def test_paths_never_get_shorter(self, classic6):
        engine = MaxFlowEngine(classic6, 0, 5)
        engine.run()
        lengths = [len(p) for p in engine.paths]
        assert lengths == sorted(lengths)

    def test_line(self, line3):
        assert calc_max_flow(line3, 0, 2) == 4

    def test_diamond(self, diamond):
        engine = MaxFlowEngine(diamond, 0, 3)
        assert engine.run() == 4
        assert engine.iterations == 2

    def test_reverse_edge_is_needed(self, reverse_trap):
        engine = MaxFlowEngine(reverse_trap, 0, 3)
        assert engine.run() == 2
        assert engine.paths[0].path_nodes == (0, 1, 2, 3)
        assert engine.paths[1].path_nodes == (0, 6, 7, 2, 1, 4, 5, 3)
        # The cancelled unit leaves 1->2 with no net flow.
        assert engine.flow_on(1, 2) == 0

    def test_single_edge_one_iteration(self):
        net = FlowNetwork.from_edges(2, [(0, 1, 13)])
        engine = MaxFlowEngine(net, 0, 1)
        assert engine.run() == 13
        assert engine.iterations == 1

    def test_zero_capacity_edge(self):
        net = FlowNetwork.from_edges(2, [(0, 1, 0)])
        assert calc_max_flow(net, 0, 1) == 0


class TestTrivialCases:
    def test_source_equals_sink(self, classic6):
        engine = MaxFlowEngine(classic6, 2, 2)
        assert engine.run() == 0
        assert engine.iterations == 0
        assert classic6.num_edges == 9

    def test_no_edges(self):
        engine = MaxFlowEngine(FlowNetwork(4), 0, 3)
        assert engine.run() == 0
        assert engine.iterations == 0

    def test_disconnected_sink(self, disconnected):
        engine = MaxFlowEngine(disconnected, 0, 3)
        assert engine.run() == 0
        assert engine.iterations == 0

    def test_reverse_direction_has_no_flow(self, line3):
        assert calc_max_flow(line3, 2, 0) == 0


class TestInvalidNodes:
    @pytest.mark.parametrize("source, sink", [(-1, 2), (0, 3), (7, 7)])
    def test_engine_rejects_out_of_range(self, line3, source, sink):
        with pytest.raises(InvalidNodeError):
            MaxFlowEngine(line3, source, sink)

    def test_error_names_role(self, line3):
        with pytest.raises(InvalidNodeError) as exc_info:
            calc_max_flow(line3, 0, 9)
        assert exc_info.value.role == "sink"
        assert exc_info.value.node == 9

    def test_zero_node_network(self):
        with pytest.raises(InvalidNodeError):
            MaxFlowEngine(FlowNetwork(0), 0, 0)


class TestResidualInvariants:
    def test_no_negative_capacity_at_any_step(self, classic6):
        seen = []

        class Check:
            def on_augment(self, iteration, path):
                seen.append(min(e.capacity for _, e in classic6.edges()))

            def on_complete(self, total_flow, iterations):
                pass

        MaxFlowEngine(classic6, 0, 5, reporter=Check()).run()
        assert len(seen) == 4
        assert all(c >= 0 for c in seen)
        assert all(e.capacity >= 0 for _, e in classic6.edges())

    def test_reverse_edge_rises_by_bottleneck(self, classic6):
        snapshots = [self._pair_caps(classic6)]
        paths = []

        class Snap:
            def on_augment(self, iteration, path):
                paths.append(path)
                snapshots.append(TestResidualInvariants._pair_caps(classic6))

            def on_complete(self, total_flow, iterations):
                pass

        MaxFlowEngine(classic6, 0, 5, reporter=Snap()).run()
        for before, after, path in zip(snapshots, snapshots[1:], paths):
            for u, v in path.edges:
                assert before.get((u, v), 0) - after.get((u, v), 0) == path.bottleneck
                assert after.get((v, u), 0) - before.get((v, u), 0) == path.bottleneck

    @staticmethod
    def _pair_caps(network):
        caps = {}
        for u, e in network.edges():
            caps[(u, e.destination)] = caps.get((u, e.destination), 0) + e.capacity
        return caps

    def test_conservation(self, classic6):
        engine = MaxFlowEngine(classic6, 0, 5)
        total = engine.run()
        for node in range(1, 5):
            assert sum(engine.flow_on(node, v) for v in range(6)) == 0
        assert sum(engine.flow_on(0, v) for v in range(6)) == total
        assert sum(engine.flow_on(v, 5) for v in range(6)) == total

    def test_flow_is_antisymmetric(self, classic6):
        engine = MaxFlowEngine(classic6, 0, 5)
        engine.run()
        for u in range(6):
            for v in range(6):
                assert engine.flow_on(u, v) == -engine.flow_on(v, u)

    def test_reverse_edges_created_lazily(self, line3):
        engine = MaxFlowEngine(line3, 0, 2)
        engine.run()
        # 0->1 and 1->2 carried flow, so both reverse edges now exist.
        assert line3.capacity_of(1, 0) == 4
        assert line3.capacity_of(2, 1) == 4
        assert line3.num_edges == 4

    def test_unused_edges_get_no_reverse(self):
        net = FlowNetwork.from_edges(3, [(0, 2, 5), (0, 1, 5)])
        MaxFlowEngine(net, 0, 2).run()
        assert net.find_edge(1, 0) is None
        assert net.find_edge(2, 0) is not None

    def test_caller_reverse_edge_is_reused(self):
        net = FlowNetwork.from_edges(2, [(0, 1, 5), (1, 0, 2)])
        engine = MaxFlowEngine(net, 0, 1)
        assert engine.run() == 5
        assert net.num_edges == 2
        assert net.capacity_of(1, 0) == 7
        assert engine.flow_on(0, 1) == 5

    def test_parallel_edges_all_carry_flow(self):
        net = FlowNetwork.from_edges(2, [(0, 1, 3), (0, 1, 4)])
        engine = MaxFlowEngine(net, 0, 1)
        assert engine.run() == 7
        assert engine.iterations == 2
        assert net.total_capacity(0, 1) == 0
        assert net.capacity_of(1, 0) == 7


class TestRerun:
    def test_second_run_on_drained_network(self, classic6):
        engine = MaxFlowEngine(classic6, 0, 5)
        assert engine.run() == 19
        assert engine.run() == 0
        assert engine.iterations == 0
        assert engine.max_flow == 19

    def test_summary_after_rerun_keeps_total(self, classic6):
        engine = MaxFlowEngine(classic6, 0, 5)
        engine.run()
        engine.run()
        summary = engine.summary()
        assert summary.total_flow == 19
        assert summary.iterations == 0
        assert summary.paths == ()
        assert summary.min_cut_capacity == 19

    def test_new_engine_on_residual(self, classic6):
        MaxFlowEngine(classic6, 0, 5).run()
        engine = MaxFlowEngine(classic6, 0, 5)
        assert engine.run() == 0
        assert engine.paths == []


class TestConfig:
    def test_full_bfs_gives_same_flow(self, classic6):
        config = EngineConfig(stop_at_sink=False)
        assert calc_max_flow(classic6, 0, 5, config=config) == 19

    def test_indexed_edges_give_same_paths(self, classic6):
        plain = MaxFlowEngine(classic6.copy(), 0, 5)
        plain.run()
        indexed = EngineConfig(index_edges=True)
        fast = MaxFlowEngine(classic6.copy(), 0, 5, config=indexed)
        fast.run()
        assert fast.paths == plain.paths
        assert fast.network.edge_tuples() == plain.network.edge_tuples()

    def test_max_iterations_caps_run(self, classic6, caplog):
        engine = MaxFlowEngine(classic6, 0, 5, config=EngineConfig(max_iterations=2))
        assert engine.run() == 10
        assert engine.iterations == 2
        assert any("max_iterations" in r.message for r in caplog.records)

    def test_negative_max_iterations_rejected(self):
        with pytest.raises(ValueError):
            EngineConfig(max_iterations=-1)


class TestReporter:
    def test_recording_reporter(self, classic6):
        reporter = RecordingReporter()
        engine = MaxFlowEngine(classic6, 0, 5, reporter=reporter)
        engine.run()
        assert reporter.paths == engine.paths
        assert reporter.total_flow == 19
        assert reporter.iterations == 4
        assert reporter.completed

    def test_reporter_called_for_trivial_run(self, classic6):
        reporter = RecordingReporter()
        MaxFlowEngine(classic6, 1, 1, reporter=reporter).run()
        assert reporter.paths == []
        assert reporter.total_flow == 0
        assert reporter.iterations == 0


class TestCalcMaxFlow:
    def test_copy_leaves_input_untouched(self, classic6):
        before = classic6.edge_tuples()
        assert calc_max_flow(classic6, 0, 5) == 19
        assert classic6.edge_tuples() == before

    def test_in_place(self, classic6):
        calc_max_flow(classic6, 0, 5, copy_network=False)
        assert calc_max_flow(classic6, 0, 5, copy_network=False) == 0

    def test_return_summary(self, classic6):
        flow, summary = calc_max_flow(classic6, 0, 5, return_summary=True)
        assert flow == 19
        assert isinstance(summary, FlowSummary)
        assert summary.total_flow == 19
        assert summary.iterations == 4

    def test_return_network(self, classic6):
        flow, residual = calc_max_flow(classic6, 0, 5, return_network=True)
        assert flow == 19
        assert residual is not classic6
        assert residual.capacity_of(0, 1) == 0

    def test_return_both(self, classic6):
        result = calc_max_flow(
            classic6, 0, 5, return_summary=True, return_network=True
        )
        assert len(result) == 3
        assert isinstance(result[1], FlowSummary)
        assert isinstance(result[2], FlowNetwork)


class TestSummary:
    def test_summary_contents(self, classic6):
        engine = MaxFlowEngine(classic6, 0, 5)
        engine.run()
        summary = engine.summary()
        assert summary.reachable == {0, 2}
        assert summary.min_cut == [(0, 1), (2, 4)]
        assert summary.min_cut_capacity == 19
        assert summary.edge_flow[(0, 1)] == 10
        assert summary.edge_flow[(0, 2)] == 9
        assert (1, 2) not in summary.edge_flow
        assert summary.residual_cap[(0, 2)] == 1
        assert summary.residual_cap[(2, 0)] == 9

    def test_summary_to_dict(self, diamond):
        engine = MaxFlowEngine(diamond, 0, 3)
        engine.run()
        data = engine.summary().to_dict()
        assert data["total_flow"] == 4
        assert data["iterations"] == 2
        assert data["paths"][0] == {"path_nodes": [0, 1, 3], "bottleneck": 2}
        assert data["reachable"] == [0, 1]
        assert data["min_cut"] == [
            {"source": 0, "target": 2},
            {"source": 1, "target": 3},
        ]
        assert data["min_cut_capacity"] == 4

    def test_saturated_edges(self, diamond):
        assert saturated_edges(diamond, 0, 3) == [(0, 2), (1, 3)]
        # Input network is not modified.
        assert diamond.num_edges == 4


def test_augmenting_path_helpers():
    path = AugmentingPath((0, 2, 5), 3)
    assert path.edges == [(0, 2), (2, 5)]
    assert len(path) == 2
    assert str(path) == "0 -> 2 -> 5 (+3)"
