"""Tests for output formatting."""

import json

from declareviz.graph.builder import build_element_graph
from declareviz.graph.constraint_map import map_constraint
from declareviz.graph.elements import Point
from declareviz.layout.engine import LayoutResult
from declareviz.output.formatter import (
    format_edges,
    format_elements,
    format_render_summary,
    format_validation_result,
)
from declareviz.render.surface import RenderSurface
from declareviz.validators.base import ValidationResult


class TestFormatValidationResult:
    def test_text_passed(self):
        output = format_validation_result(ValidationResult())

        assert "ERRORS:" in output
        assert "(none)" in output
        assert output.endswith("Check passed")

    def test_text_warnings(self):
        result = ValidationResult()
        result.add_warning("DANGLING_ACTIVITY_REF", "undeclared 'X'", activity="X")

        output = format_validation_result(result)
        assert "DANGLING_ACTIVITY_REF: [X] undeclared 'X'" in output
        assert output.endswith("Check passed with 1 warning(s)")

    def test_text_failed(self):
        result = ValidationResult()
        result.add_error("BLANK_ACTIVITY_ID", "blank")
        result.add_info("UNKNOWN_CONSTRAINT", "no notation", constraint_index=3)

        output = format_validation_result(result)
        assert "[#3] no notation" in output
        assert output.endswith("Check failed: 1 error(s), 0 warning(s)")

    def test_json(self):
        result = ValidationResult()
        result.add_warning("MULTIPLE_INIT", "two", activity="A", activities=["A", "B"])

        data = json.loads(format_validation_result(result, "json"))
        assert data["valid"] is True
        assert data["error_count"] == 0
        assert data["warning_count"] == 1
        assert data["issues"][0]["severity"] == "warning"
        assert data["issues"][0]["details"] == {"activities": ["A", "B"]}


class TestFormatElements:
    def test_text(self, process_elements):
        output = format_elements(process_elements)

        assert output.startswith("NODES:")
        assert "  A  (locked)" in output
        assert "  init-A  (locked, anchor=A)" in output
        assert "A->B-succession-0-main  [succession-main]" in output

    def test_json(self, process_elements):
        data = json.loads(format_elements(process_elements, "json"))

        assert [n["id"] for n in data["nodes"]] == ["A", "B", "C", "D", "init-A"]
        assert data["nodes"][0]["position"] == {"x": 0.0, "y": 0.0}
        assert data["nodes"][4]["type"] == "decorator"
        assert data["edges"][-1]["type"] == "decorator"
        assert data["edges"][-1]["constraint"] == "init"


class TestFormatEdges:
    def test_text_fallback_label(self):
        output = format_edges(map_constraint("XYZ abc", "A", "B", 0))
        assert output == "A->B-xyz_abc-0  [line-single]  label='xyz_abc'"

    def test_json(self):
        data = json.loads(format_edges(map_constraint("precedence", "A", "B", 1), "json"))

        assert [e["id"] for e in data] == [
            "A->B-precedence-1-triangle",
            "A->B-precedence-1-circle",
        ]
        assert data[0]["constraint"] == "precedence"
        assert "label" not in data[0]


class TestFormatRenderSummary:
    def _surface(self, graph):
        layout = LayoutResult(
            positions={"A": Point(0.0, 0.0), "B": Point(250.0, 0.0), "init-A": Point(0.0, 0.0)},
            converged=False,
            iterations=12,
            elapsed=0.5,
        )
        return RenderSurface(graph, layout)

    def test_text(self, minimal_model):
        output = format_render_summary(self._surface(build_element_graph(minimal_model)))

        assert output.splitlines()[0] == "Rendered 3 node(s) and 1 edge(s)"
        assert "stopped at budget after 12 iteration(s)" in output
        assert "  B: (250.0, 0.0)" in output

    def test_json(self, minimal_model):
        data = json.loads(
            format_render_summary(self._surface(build_element_graph(minimal_model)), "json")
        )

        assert data["nodes"] == 3
        assert data["edges"] == 1
        assert data["converged"] is False
        assert len(data["elements"]) == 4
