"""The live rendering surface of one session."""

from typing import Any

from ..graph.element_graph import ElementGraph
from ..graph.elements import Point
from ..layout.engine import LayoutResult
from .errors import SessionError
from .raster import render_png
from .styles import StyleRegistry


class RenderSurface:
    """Positioned elements ready for display or export.

    A surface is owned by exactly one session and is destroyed when that
    session moves to another model or closes. Every accessor raises
    SessionError after ``destroy()``.
    """

    def __init__(
        self,
        graph: ElementGraph,
        layout: LayoutResult,
        styles: StyleRegistry | None = None,
    ):
        self._graph = graph
        self._positions = dict(layout.positions)
        self._layout = layout
        self._styles = styles or StyleRegistry()
        self._destroyed = False

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def graph(self) -> ElementGraph:
        self._ensure_alive()
        return self._graph

    @property
    def layout(self) -> LayoutResult:
        self._ensure_alive()
        return self._layout

    @property
    def positions(self) -> dict[str, Point]:
        self._ensure_alive()
        return dict(self._positions)

    def position(self, node_id: str) -> Point | None:
        """Get the final position of a node."""
        self._ensure_alive()
        return self._positions.get(node_id)

    def to_elements(self) -> list[dict[str, Any]]:
        """Dump nodes and edges as cytoscape-style element dicts."""
        self._ensure_alive()
        elements: list[dict[str, Any]] = []

        for node in self._graph.nodes():
            entry: dict[str, Any] = {
                "group": "nodes",
                "data": {"id": node.id, "label": node.label},
                "locked": node.locked,
                "classes": " ".join(node.classes),
            }
            if node.anchor:
                entry["data"]["anchor"] = node.anchor
            position = self._positions.get(node.id)
            if position is not None:
                entry["position"] = {"x": position.x, "y": position.y}
            elements.append(entry)

        for edge in self._graph.edges():
            data: dict[str, Any] = {
                "id": edge.id,
                "source": edge.source,
                "target": edge.target,
            }
            if edge.constraint:
                data["constraint"] = edge.constraint
            if edge.label:
                data["label"] = edge.label
            elements.append(
                {"group": "edges", "data": data, "classes": " ".join(edge.classes)}
            )

        return elements

    def to_png(self, scale: float = 1.0) -> bytes:
        """Rasterize the surface to PNG bytes."""
        self._ensure_alive()
        return render_png(self._graph, self._positions, self._styles, scale=scale)

    def destroy(self) -> None:
        """Release the graph and positions. Safe to call twice."""
        if self._destroyed:
            return
        self._graph.clear()
        self._positions.clear()
        self._destroyed = True

    def _ensure_alive(self) -> None:
        if self._destroyed:
            raise SessionError("Render surface has been destroyed")
