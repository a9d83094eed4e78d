"""Output layer: file export and console formatting."""

from .export import (
    DEFAULT_IMAGE_FILENAME,
    DEFAULT_MODEL_FILENAME,
    export_model_json,
    write_elements_json,
    write_model_json,
    write_png,
)

__all__ = [
    "DEFAULT_IMAGE_FILENAME",
    "DEFAULT_MODEL_FILENAME",
    "export_model_json",
    "write_elements_json",
    "write_model_json",
    "write_png",
]
