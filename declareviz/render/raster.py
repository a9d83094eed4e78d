"""Raster rendering of positioned elements with Pillow."""

import io
import math

from PIL import Image, ImageDraw, ImageFont

from ..graph.element_graph import ElementGraph
from ..graph.elements import EdgeDescriptor, Node, Point
from .styles import EdgeStyle, NodeStyle, StyleRegistry

BACKGROUND = "#ffffff"
DASH_PATTERNS = {"dashed": (8.0, 5.0), "dotted": (2.0, 4.0)}


def render_png(
    graph: ElementGraph,
    positions: dict[str, Point],
    styles: StyleRegistry,
    scale: float = 1.0,
    padding: float = 40.0,
) -> bytes:
    """Render a positioned element graph to PNG bytes.

    Edges are drawn first, then decorator nodes, then activity nodes, so
    a decorator sits underneath its anchor and only its label shows.
    Elements without a position are skipped.

    Args:
        graph: The element graph.
        positions: Node positions in layout coordinates.
        styles: Style registry for class tags.
        scale: Pixel scale factor.
        padding: Margin around the drawing, in layout units.

    Returns:
        The encoded PNG image.

    Raises:
        ValueError: If ``scale`` is not positive.
    """
    if scale <= 0:
        raise ValueError(f"Scale must be positive, got {scale}")

    canvas = _Canvas(graph, positions, styles, scale, padding)

    for edge in graph.edges():
        canvas.draw_edge(edge)
    for node in sorted(graph.nodes(), key=lambda n: not n.is_decorator):
        canvas.draw_node(node)

    buffer = io.BytesIO()
    canvas.image.save(buffer, format="PNG")
    return buffer.getvalue()


class _Canvas:
    """Pillow image plus the layout-to-pixel transform."""

    def __init__(
        self,
        graph: ElementGraph,
        positions: dict[str, Point],
        styles: StyleRegistry,
        scale: float,
        padding: float,
    ):
        self.graph = graph
        self.positions = positions
        self.styles = styles
        self.scale = scale

        boxes = [
            self._box(node, positions[node.id])
            for node in graph.nodes()
            if node.id in positions
        ]
        if boxes:
            min_x = min(b[0] for b in boxes) - padding
            min_y = min(b[1] for b in boxes) - padding
            max_x = max(b[2] for b in boxes) + padding
            max_y = max(b[3] for b in boxes) + padding
        else:
            min_x, min_y, max_x, max_y = 0.0, 0.0, 2 * padding, 2 * padding

        self.origin = (min_x, min_y)
        width = max(1, math.ceil((max_x - min_x) * scale))
        height = max(1, math.ceil((max_y - min_y) * scale))
        self.image = Image.new("RGB", (width, height), BACKGROUND)
        self.draw = ImageDraw.Draw(self.image)
        self._fonts: dict[int, ImageFont.ImageFont | ImageFont.FreeTypeFont] = {}

    # -------------------------------------------------------------------------
    # Geometry helpers
    # -------------------------------------------------------------------------

    def _box(self, node: Node, center: Point) -> tuple[float, float, float, float]:
        style = self.styles.node_style(node.classes)
        half_w, half_h = style.width / 2, style.height / 2
        return (center.x - half_w, center.y - half_h, center.x + half_w, center.y + half_h)

    def to_pixels(self, x: float, y: float) -> tuple[float, float]:
        return ((x - self.origin[0]) * self.scale, (y - self.origin[1]) * self.scale)

    def font(self, size: int):
        pixel_size = max(6, round(size * self.scale))
        if pixel_size not in self._fonts:
            self._fonts[pixel_size] = ImageFont.load_default(size=pixel_size)
        return self._fonts[pixel_size]

    def _boundary_distance(self, node_id: str, ux: float, uy: float) -> float:
        """Distance from a node's center to its box edge along (ux, uy)."""
        node = self.graph.get_node(node_id)
        style = self.styles.node_style(node.classes if node else ())
        limits = []
        if abs(ux) > 1e-9:
            limits.append(style.width / 2 / abs(ux))
        if abs(uy) > 1e-9:
            limits.append(style.height / 2 / abs(uy))
        return min(limits) if limits else 0.0

    # -------------------------------------------------------------------------
    # Nodes
    # -------------------------------------------------------------------------

    def draw_node(self, node: Node) -> None:
        center = self.positions.get(node.id)
        if center is None:
            return
        style = self.styles.node_style(node.classes)
        if not style.visible:
            return

        left, top, right, bottom = self._box(node, center)
        x0, y0 = self.to_pixels(left, top)
        x1, y1 = self.to_pixels(right, bottom)
        border = round(style.border_width * self.scale)
        self.draw.rounded_rectangle(
            (x0, y0, x1, y1),
            radius=round(style.corner_radius * self.scale),
            fill=style.fill,
            outline=style.border_color if border > 0 else None,
            width=max(border, 1),
        )

        label = style.label if style.label is not None else node.label
        if label:
            cx = (x0 + x1) / 2
            cy = y0 - 4 * self.scale if style.label_position == "top" else (y0 + y1) / 2
            self._text(label, cx, cy, style, above=style.label_position == "top")

    def _text(
        self, text: str, cx: float, cy: float, style: NodeStyle | EdgeStyle, above: bool = False
    ) -> None:
        font = self.font(getattr(style, "font_size", 11))
        left, top, right, bottom = self.draw.textbbox((0, 0), text, font=font)
        width, height = right - left, bottom - top
        x = cx - width / 2 - left
        y = (cy - height - top) if above else (cy - height / 2 - top)
        self.draw.text((x, y), text, fill=style.text_color, font=font)

    # -------------------------------------------------------------------------
    # Edges
    # -------------------------------------------------------------------------

    def draw_edge(self, edge: EdgeDescriptor) -> None:
        source = self.positions.get(edge.source)
        target = self.positions.get(edge.target)
        if source is None or target is None:
            return

        dx, dy = target.x - source.x, target.y - source.y
        length = math.hypot(dx, dy)
        if length < 1e-9:
            return
        ux, uy = dx / length, dy / length
        px, py = -uy, ux

        style = self.styles.edge_style(edge.classes)
        shift = style.offset * style.line_gap
        start_cut = self._boundary_distance(edge.source, ux, uy)
        end_cut = self._boundary_distance(edge.target, ux, uy)
        if start_cut + end_cut >= length:
            return

        start = (
            source.x + ux * start_cut + px * shift,
            source.y + uy * start_cut + py * shift,
        )
        end = (
            target.x - ux * end_cut + px * shift,
            target.y - uy * end_cut + py * shift,
        )
        p_start = self.to_pixels(*start)
        p_end = self.to_pixels(*end)
        width = max(1, round(style.line_width * self.scale))

        if style.show_line:
            self._line(p_start, p_end, style, width)
        if style.negated:
            self._negation_bars(p_start, p_end, (ux, uy), (px, py), style, width)

        marker = style.marker_size * self.scale
        if style.source_marker == "circle":
            center = (p_start[0] + ux * marker / 2, p_start[1] + uy * marker / 2)
            self._circle(center, marker / 2, style)
        elif style.source_marker == "triangle":
            self._triangle(p_start, (-ux, -uy), marker, style)

        inset = style.marker_inset * self.scale
        tip = (p_end[0] - ux * inset, p_end[1] - uy * inset)
        if style.target_marker == "circle":
            center = (tip[0] - ux * marker / 2, tip[1] - uy * marker / 2)
            self._circle(center, marker / 2, style)
        elif style.target_marker == "triangle":
            self._triangle(tip, (ux, uy), marker, style)

        if edge.label:
            mid_x = (p_start[0] + p_end[0]) / 2 + px * 10 * self.scale
            mid_y = (p_start[1] + p_end[1]) / 2 + py * 10 * self.scale
            self._text(edge.label, mid_x, mid_y, style)

    def _line(self, start, end, style: EdgeStyle, width: int) -> None:
        if style.line_style == "solid":
            self.draw.line([start, end], fill=style.line_color, width=width)
            return

        dash, gap = (v * self.scale for v in DASH_PATTERNS[style.line_style])
        total = math.hypot(end[0] - start[0], end[1] - start[1])
        if total == 0:
            return
        ux, uy = (end[0] - start[0]) / total, (end[1] - start[1]) / total
        pos = 0.0
        while pos < total:
            stop = min(pos + dash, total)
            self.draw.line(
                [
                    (start[0] + ux * pos, start[1] + uy * pos),
                    (start[0] + ux * stop, start[1] + uy * stop),
                ],
                fill=style.line_color,
                width=width,
            )
            pos = stop + gap

    def _negation_bars(self, start, end, direction, normal, style, width) -> None:
        """Draw the two short crossing bars marking a negated constraint."""
        mid_x, mid_y = (start[0] + end[0]) / 2, (start[1] + end[1]) / 2
        half = 6 * self.scale
        for along in (-3 * self.scale, 3 * self.scale):
            cx = mid_x + direction[0] * along
            cy = mid_y + direction[1] * along
            self.draw.line(
                [
                    (cx - normal[0] * half, cy - normal[1] * half),
                    (cx + normal[0] * half, cy + normal[1] * half),
                ],
                fill=style.line_color,
                width=width,
            )

    def _circle(self, center, radius: float, style: EdgeStyle) -> None:
        self.draw.ellipse(
            (center[0] - radius, center[1] - radius, center[0] + radius, center[1] + radius),
            fill=style.line_color,
        )

    def _triangle(self, tip, direction, size: float, style: EdgeStyle) -> None:
        ux, uy = direction
        base_x, base_y = tip[0] - ux * size, tip[1] - uy * size
        half = size / 2
        self.draw.polygon(
            [
                tip,
                (base_x - uy * half, base_y + ux * half),
                (base_x + uy * half, base_y - ux * half),
            ],
            fill=style.line_color,
        )
