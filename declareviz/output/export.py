"""Export of models and rendered surfaces to files."""

import json
from pathlib import Path

from ..render.surface import RenderSurface
from ..schema.models import DeclareModel

DEFAULT_MODEL_FILENAME = "declareModel.json"
DEFAULT_IMAGE_FILENAME = "declareModel_graph.png"


def export_model_json(model: DeclareModel) -> str:
    """Serialize a model to a JSON document in the input schema."""
    return json.dumps(model.to_document(), indent=2)


def write_model_json(model: DeclareModel, path: str | Path | None = None) -> Path:
    """Write a model's JSON document to a file.

    Args:
        model: The model to export.
        path: Destination, ``declareModel.json`` when omitted.

    Returns:
        The path written.
    """
    path = Path(path or DEFAULT_MODEL_FILENAME)
    path.write_text(export_model_json(model) + "\n", encoding="utf-8")
    return path


def write_png(
    surface: RenderSurface, path: str | Path | None = None, scale: float = 1.0
) -> Path:
    """Write a surface's raster image to a file.

    Args:
        surface: The rendered surface.
        path: Destination, ``declareModel_graph.png`` when omitted.
        scale: Pixel scale factor.

    Returns:
        The path written.
    """
    path = Path(path or DEFAULT_IMAGE_FILENAME)
    path.write_bytes(surface.to_png(scale=scale))
    return path


def write_elements_json(surface: RenderSurface, path: str | Path) -> Path:
    """Write a surface's positioned elements as JSON."""
    path = Path(path)
    path.write_text(json.dumps(surface.to_elements(), indent=2) + "\n", encoding="utf-8")
    return path
