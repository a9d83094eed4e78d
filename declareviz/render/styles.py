"""Style registry mapping element class tags to visual styles."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from ..schema.errors import SchemaValidationError
from ..schema.loader import flatten_errors, load_document

Marker = Literal["none", "circle", "triangle"]
LineStyle = Literal["solid", "dashed", "dotted"]


class NodeStyle(BaseModel):
    """Resolved style of a node."""

    model_config = ConfigDict(extra="forbid")

    width: float = 80.0
    height: float = 40.0
    fill: str = "#f0f0f0"
    border_color: str = "#333333"
    border_width: int = 2
    corner_radius: int = 8
    text_color: str = "#000000"
    font_size: int = 12
    label: str | None = None  # Overrides the node's own label
    label_position: Literal["center", "top"] = "center"
    visible: bool = True


class EdgeStyle(BaseModel):
    """Resolved style of an edge."""

    model_config = ConfigDict(extra="forbid")

    line_color: str = "#000000"
    line_width: int = 2
    line_style: LineStyle = "solid"
    show_line: bool = True
    source_marker: Marker = "none"
    target_marker: Marker = "none"
    marker_size: float = 8.0
    marker_inset: float = 0.0  # Distance of the target marker from the node
    offset: int = 0  # Perpendicular offset in line gaps, for triple lines
    line_gap: float = 4.0
    negated: bool = False
    text_color: str = "#000000"


DEFAULT_NODE_RULES: dict[str, dict] = {
    "init-node": {
        "label": "init",
        "label_position": "top",
        "fill": "#ffffff",
        "border_width": 0,
        "font_size": 18,
    },
}

DEFAULT_EDGE_RULES: dict[str, dict] = {
    # Line kinds
    "line-single": {},
    "line-negative": {"negated": True},
    "line-choice": {"line_style": "dashed"},
    "line-triple-1": {"offset": -1},
    "line-triple-2": {"offset": 0},
    "line-triple-3": {"offset": 1},
    # End markers
    "source-circle": {"source_marker": "circle"},
    "source-circle-target-triangle": {
        "source_marker": "circle",
        "target_marker": "triangle",
    },
    "both-circle": {"source_marker": "circle", "target_marker": "circle"},
    "compound-arrow-circle": {"target_marker": "circle", "marker_inset": 14.0},
    "compound-arrow-triangle": {"target_marker": "triangle"},
    # Succession and precedence overlays
    "succession-main": {},
    "succession-source-circle": {"show_line": False, "source_marker": "circle"},
    "succession-target-triangle": {"show_line": False, "target_marker": "triangle"},
    "succession-target-circle": {
        "show_line": False,
        "target_marker": "circle",
        "marker_inset": 14.0,
    },
    "precedence-arrow": {"target_marker": "triangle"},
    "precedence-circle-offset": {
        "show_line": False,
        "target_marker": "circle",
        "marker_inset": 14.0,
    },
    # Decorator edge joins two collocated nodes
    "init-edge": {"show_line": False},
}


class StyleRegistry:
    """Resolves class tags into node and edge styles.

    Rules for a node's or edge's tags are applied in tag order on top of
    the defaults. Tags without a rule are ignored.
    """

    def __init__(
        self,
        node_rules: dict[str, dict] | None = None,
        edge_rules: dict[str, dict] | None = None,
    ):
        self._node_rules = {**DEFAULT_NODE_RULES, **(node_rules or {})}
        self._edge_rules = {**DEFAULT_EDGE_RULES, **(edge_rules or {})}

    def node_style(self, classes: tuple[str, ...] | list[str] = ()) -> NodeStyle:
        """Resolve the style for a node with the given class tags."""
        merged: dict = {}
        for tag in classes:
            merged.update(self._node_rules.get(tag, {}))
        return NodeStyle.model_validate(merged)

    def edge_style(self, classes: tuple[str, ...] | list[str] = ()) -> EdgeStyle:
        """Resolve the style for an edge with the given class tags."""
        merged: dict = {}
        for tag in classes:
            merged.update(self._edge_rules.get(tag, {}))
        return EdgeStyle.model_validate(merged)

    def has_rule(self, tag: str) -> bool:
        return tag in self._node_rules or tag in self._edge_rules

    def with_overrides(
        self,
        node_rules: dict[str, dict] | None = None,
        edge_rules: dict[str, dict] | None = None,
    ) -> "StyleRegistry":
        """Get a registry with some rules replaced or added."""
        return StyleRegistry(
            {**self._node_rules, **(node_rules or {})},
            {**self._edge_rules, **(edge_rules or {})},
        )


def load_styles(path: str | Path) -> StyleRegistry:
    """Load style overrides from a YAML or JSON file.

    The file holds ``nodes`` and ``edges`` mappings from class tag to
    style fields. Every rule is checked against the style models.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If a rule has unknown or invalid fields.
    """
    data = load_document(path)
    node_rules = data.get("nodes") or {}
    edge_rules = data.get("edges") or {}

    for rules, style_cls in ((node_rules, NodeStyle), (edge_rules, EdgeStyle)):
        if not isinstance(rules, dict):
            raise SchemaValidationError(
                f"Expected mapping of style rules, got {type(rules).__name__}"
            )
        for tag, rule in rules.items():
            try:
                style_cls.model_validate(rule)
            except ValidationError as e:
                raise SchemaValidationError(
                    f"Invalid style rule for '{tag}'", flatten_errors(e)
                ) from e

    return StyleRegistry(node_rules, edge_rules)
