"""Render layer: style registry, rasterizer and the live surface."""

from .errors import SessionError
from .styles import EdgeStyle, NodeStyle, StyleRegistry, load_styles
from .raster import render_png
from .surface import RenderSurface

__all__ = [
    "SessionError",
    "EdgeStyle",
    "NodeStyle",
    "StyleRegistry",
    "load_styles",
    "render_png",
    "RenderSurface",
]
