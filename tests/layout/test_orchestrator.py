"""Tests for the layout orchestrator."""

import logging

import pytest

from declareviz.graph.elements import ANCHOR_POSITION, EdgeDescriptor, ElementSet, Node, Point
from declareviz.graph.node_types import NodeType
from declareviz.layout.config import LayoutConfig
from declareviz.layout.engine import LayoutResult, seed_layout
from declareviz.layout.errors import LayoutError
from declareviz.layout.orchestrator import LayoutOrchestrator, repin_decorators


class StubEngine:
    """Engine that records its input and places nodes on a line."""

    def __init__(self, converged: bool = True):
        self.converged = converged
        self.calls = []

    def run(self, elements, edge_length, options, on_tick=None):
        self.calls.append((elements, edge_length, options, on_tick))
        positions = {
            node.id: node.position if node.locked else Point(100.0 * (i + 1), -3.0)
            for i, node in enumerate(elements.nodes)
        }
        return LayoutResult(
            positions=positions, converged=self.converged, iterations=7, elapsed=0.01
        )


class FailingEngine:
    """Engine that always raises the given error."""

    def __init__(self, error: Exception):
        self.error = error

    def run(self, elements, edge_length, options, on_tick=None):
        raise self.error


def _constraints(count):
    return ElementSet(
        nodes=[Node(id="A", label="A")],
        edges=[],
        constraint_count=count,
    )


class TestEdgeLength:
    def test_succession_edges_are_longer(self):
        orchestrator = LayoutOrchestrator()

        for suffix in ("main", "sourcecircle", "targettriangle", "targetcircle"):
            edge = EdgeDescriptor(
                id=f"A->B-succession-0-{suffix}",
                source="A",
                target="B",
                constraint="succession",
            )
            assert orchestrator.edge_length(edge) == 500.0

    @pytest.mark.parametrize(
        "kind", ["response", "chain_succession", "precedence", "xyz_abc", None]
    )
    def test_other_edges(self, kind):
        edge = EdgeDescriptor(id="e", source="A", target="B", constraint=kind)
        assert LayoutOrchestrator().edge_length(edge) == 250.0

    def test_configured_lengths(self):
        orchestrator = LayoutOrchestrator(
            LayoutConfig(edge_length=100, succession_edge_length=300)
        )
        succession = EdgeDescriptor(id="s", source="A", target="B", constraint="succession")
        response = EdgeDescriptor(id="r", source="A", target="B", constraint="response")

        assert orchestrator.edge_length(succession) == 300.0
        assert orchestrator.edge_length(response) == 100.0


class TestNodeSpacing:
    @pytest.mark.parametrize("count, expected", [(0, 40.0), (7, 40.0), (8, 150.0), (20, 150.0)])
    def test_threshold(self, count, expected):
        assert LayoutOrchestrator().node_spacing(_constraints(count)) == expected

    def test_options_carry_config(self, fast_config):
        options = LayoutOrchestrator(fast_config).options_for(_constraints(9))

        assert options.max_iterations == 50
        assert options.max_simulation_time == 5.0
        assert options.node_spacing == 150.0
        assert options.avoid_overlap is True


class TestLayout:
    def test_decorators_not_sent_to_engine(self, process_elements):
        engine = StubEngine()
        LayoutOrchestrator(engine=engine).layout(process_elements)

        elements = engine.calls[0][0]
        assert "init-A" not in [node.id for node in elements.nodes]
        assert "edge-init-A" not in [edge.id for edge in elements.edges]

    def test_decorators_pinned_to_anchor(self, process_elements):
        result = LayoutOrchestrator(engine=StubEngine()).layout(process_elements)

        assert result.positions["init-A"] == result.positions["A"]
        assert result.positions["A"] == ANCHOR_POSITION
        assert set(result.positions) == {"A", "B", "C", "D", "init-A"}
        assert result.iterations == 7

    def test_on_tick_forwarded(self, process_elements):
        engine = StubEngine()

        def on_tick(i, positions):
            pass

        LayoutOrchestrator(engine=engine).layout(process_elements, on_tick=on_tick)
        assert engine.calls[0][3] is on_tick

    def test_edge_length_policy_handed_to_engine(self, process_elements):
        engine = StubEngine()
        orchestrator = LayoutOrchestrator(engine=engine)
        orchestrator.layout(process_elements)

        edge_length = engine.calls[0][1]
        main = process_elements.edges[0]
        assert edge_length(main) == 500.0

    def test_not_converged_is_logged(self, process_elements, caplog):
        orchestrator = LayoutOrchestrator(engine=StubEngine(converged=False))

        with caplog.at_level(logging.INFO, logger="declareviz.layout.orchestrator"):
            result = orchestrator.layout(process_elements)

        assert result.converged is False
        assert "without converging" in caplog.text

    @pytest.mark.parametrize(
        "error", [LayoutError("engine gave up"), RuntimeError("engine exploded")]
    )
    def test_engine_failure_falls_back_to_seed(self, process_elements, error, caplog):
        orchestrator = LayoutOrchestrator(engine=FailingEngine(error))

        with caplog.at_level(logging.WARNING, logger="declareviz.layout.orchestrator"):
            result = orchestrator.layout(process_elements)

        assert result.converged is False
        assert set(result.positions) == {"A", "B", "C", "D", "init-A"}
        assert result.positions["A"] == ANCHOR_POSITION
        assert result.positions["init-A"] == result.positions["A"]
        assert "using seed layout" in caplog.text
        assert str(error) in caplog.text

    def test_default_engine(self, process_elements, fast_config):
        result = LayoutOrchestrator(fast_config).layout(process_elements)

        assert result.positions["A"] == ANCHOR_POSITION
        assert result.positions["init-A"] == result.positions["A"]
        assert set(result.positions) == {"A", "B", "C", "D", "init-A"}


class TestRepinDecorators:
    def _decorated(self, anchor):
        return ElementSet(
            nodes=[
                Node(id="A", label="A"),
                Node(
                    id=f"init-{anchor}",
                    label="init",
                    node_type=NodeType.DECORATOR,
                    locked=True,
                    position=ANCHOR_POSITION,
                    anchor=anchor,
                ),
            ]
        )

    def test_exact_anchor_position(self):
        positions = {"A": Point(12.5, -3.25)}
        pinned = repin_decorators(self._decorated("A"), positions)

        assert pinned["init-A"] == Point(12.5, -3.25)
        assert "init-A" not in positions

    def test_missing_anchor_keeps_fixed_position(self):
        pinned = repin_decorators(self._decorated("Phantom"), {"A": Point(1.0, 2.0)})

        assert pinned["init-Phantom"] == ANCHOR_POSITION
        assert pinned["A"] == Point(1.0, 2.0)


class TestSeedLayout:
    def test_locked_nodes_keep_position(self, process_elements):
        positions = seed_layout(process_elements, 100.0)

        assert positions["A"] == ANCHOR_POSITION
        assert positions["init-A"] == ANCHOR_POSITION
        assert set(positions) == {"A", "B", "C", "D", "init-A"}

    def test_deterministic(self, process_elements):
        assert seed_layout(process_elements, 100.0) == seed_layout(process_elements, 100.0)

    def test_free_nodes_are_distinct(self, process_elements):
        positions = seed_layout(process_elements, 100.0)
        free = [positions[node_id] for node_id in ("B", "C", "D")]

        assert len(set(free)) == 3
        assert ANCHOR_POSITION not in free

    def test_single_free_node(self):
        elements = ElementSet(nodes=[Node(id="A", label="A")])

        assert seed_layout(elements, 50.0) == {"A": Point(50.0, 0.0)}

    def test_empty(self):
        assert seed_layout(ElementSet(), 50.0) == {}
