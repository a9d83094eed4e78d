"""Output formatting for lint results, element sets and renders."""

import json
from typing import Literal

from ..graph.elements import EdgeDescriptor, ElementSet, Node
from ..render.surface import RenderSurface
from ..validators.base import Severity, ValidationIssue, ValidationResult

OutputFormat = Literal["text", "json"]


def format_validation_result(
    result: ValidationResult,
    format: OutputFormat = "text",
) -> str:
    """Format a lint result for output.

    Args:
        result: The lint result to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_result_json(result)
    return _format_result_text(result)


def _format_result_text(result: ValidationResult) -> str:
    """Format result as human-readable text."""
    lines: list[str] = []

    for title, issues in (
        ("ERRORS:", result.errors),
        ("WARNINGS:", result.warnings),
        ("NOTES:", result.infos),
    ):
        lines.append(title)
        if issues:
            for issue in issues:
                lines.append(f"  {_format_issue_text(issue)}")
        else:
            lines.append("  (none)")
        lines.append("")

    errors = result.errors
    warnings = result.warnings
    if result.is_valid:
        if warnings:
            lines.append(f"Check passed with {len(warnings)} warning(s)")
        else:
            lines.append("Check passed")
    else:
        lines.append(f"Check failed: {len(errors)} error(s), {len(warnings)} warning(s)")

    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> str:
    """Format a single issue as text."""
    location = ""
    if issue.activity:
        location = f"[{issue.activity}] "
    elif issue.constraint_index is not None:
        location = f"[#{issue.constraint_index}] "

    if issue.severity == Severity.ERROR:
        symbol = "✘"
    elif issue.severity == Severity.WARNING:
        symbol = "⚠"
    else:
        symbol = "ℹ"

    return f"{symbol} {issue.code}: {location}{issue.message}"


def _format_result_json(result: ValidationResult) -> str:
    """Format result as JSON."""
    data = {
        "valid": result.is_valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "issues": [
            {
                "code": issue.code,
                "message": issue.message,
                "severity": issue.severity.value,
                "activity": issue.activity,
                "constraint_index": issue.constraint_index,
                "details": issue.details,
            }
            for issue in result.issues
        ],
    }
    return json.dumps(data, indent=2)


# -----------------------------------------------------------------------------
# Elements
# -----------------------------------------------------------------------------


def node_to_dict(node: Node) -> dict:
    data = {
        "id": node.id,
        "label": node.label,
        "type": node.node_type.value,
        "locked": node.locked,
        "classes": list(node.classes),
    }
    if node.position is not None:
        data["position"] = {"x": node.position.x, "y": node.position.y}
    if node.anchor is not None:
        data["anchor"] = node.anchor
    return data


def edge_to_dict(edge: EdgeDescriptor) -> dict:
    data = {
        "id": edge.id,
        "source": edge.source,
        "target": edge.target,
        "type": edge.edge_type.value,
        "classes": list(edge.classes),
    }
    if edge.constraint is not None:
        data["constraint"] = edge.constraint
    if edge.label is not None:
        data["label"] = edge.label
    return data


def format_edges(edges: list[EdgeDescriptor], format: OutputFormat = "text") -> str:
    """Format a list of edge descriptors."""
    if format == "json":
        return json.dumps([edge_to_dict(edge) for edge in edges], indent=2)
    return "\n".join(_format_edge_text(edge) for edge in edges)


def _format_edge_text(edge: EdgeDescriptor) -> str:
    line = f"{edge.id}  [{' '.join(edge.classes)}]"
    if edge.label:
        line += f"  label={edge.label!r}"
    return line


def format_elements(elements: ElementSet, format: OutputFormat = "text") -> str:
    """Format an assembled element set."""
    if format == "json":
        data = {
            "nodes": [node_to_dict(node) for node in elements.nodes],
            "edges": [edge_to_dict(edge) for edge in elements.edges],
        }
        return json.dumps(data, indent=2)

    lines = ["NODES:"]
    for node in elements.nodes:
        flags = []
        if node.locked:
            flags.append("locked")
        if node.anchor:
            flags.append(f"anchor={node.anchor}")
        suffix = f"  ({', '.join(flags)})" if flags else ""
        lines.append(f"  {node.id}{suffix}")
    lines.append("")
    lines.append("EDGES:")
    for edge in elements.edges:
        lines.append(f"  {_format_edge_text(edge)}")
    if not elements.edges:
        lines.append("  (none)")
    return "\n".join(lines)


def format_render_summary(surface: RenderSurface, format: OutputFormat = "text") -> str:
    """Summarize a rendered surface: element counts and layout stats."""
    layout = surface.layout
    nodes = surface.graph.nodes()
    edges = surface.graph.edges()

    if format == "json":
        return json.dumps(
            {
                "nodes": len(nodes),
                "edges": len(edges),
                "iterations": layout.iterations,
                "converged": layout.converged,
                "elapsed": round(layout.elapsed, 4),
                "elements": surface.to_elements(),
            },
            indent=2,
        )

    status = "converged" if layout.converged else "stopped at budget"
    lines = [
        f"Rendered {len(nodes)} node(s) and {len(edges)} edge(s)",
        f"Layout {status} after {layout.iterations} iteration(s) "
        f"in {layout.elapsed:.3f}s",
    ]
    for node in nodes:
        position = surface.position(node.id)
        if position is not None:
            lines.append(f"  {node.id}: ({position.x:.1f}, {position.y:.1f})")
    return "\n".join(lines)
