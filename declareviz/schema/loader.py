"""JSON/YAML loading and validation for Declare models."""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import SchemaLoadError, SchemaValidationError
from .models import DeclareModel


def load_document(path: str | Path) -> dict:
    """Load a JSON or YAML file and return the raw mapping.

    Files ending in ``.json`` are read with the json module, anything
    else with the YAML loader.

    Args:
        path: Path to the file.

    Returns:
        The parsed data as a dictionary.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise SchemaLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise SchemaLoadError(f"Not a file: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON: {e}", str(path)) from e
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}", str(path)) from e
    except OSError as e:
        raise SchemaLoadError(f"Cannot read file: {e}", str(path)) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Expected mapping at root, got {type(data).__name__}", str(path)
        )

    return data


def parse_model(path: str | Path) -> DeclareModel:
    """Load and validate a model file.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If the data fails validation.
    """
    data = load_document(path)
    return validate_model(data)


def parse_model_from_string(text: str) -> DeclareModel:
    """Parse a JSON or YAML string into a DeclareModel.

    Raises:
        SchemaLoadError: If the text cannot be parsed.
        SchemaValidationError: If the data fails validation.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise SchemaLoadError(f"Expected mapping at root, got {type(data).__name__}")

    return validate_model(data)


def validate_model(data: Any) -> DeclareModel:
    """Validate raw data into a DeclareModel.

    This is the single shape check; everything downstream assumes a
    validated model.

    Args:
        data: A DeclareModel (returned as-is) or a raw mapping.

    Returns:
        The validated model.

    Raises:
        SchemaValidationError: If the data fails validation.
    """
    if isinstance(data, DeclareModel):
        return data

    if not isinstance(data, dict):
        raise SchemaValidationError(
            f"Expected mapping at root, got {type(data).__name__}",
            [{"loc": "", "msg": "Input should be a mapping", "type": "dict_type"}],
        )

    try:
        return DeclareModel.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationError(
            f"Schema validation failed with {e.error_count()} error(s)",
            flatten_errors(e),
        ) from e


def flatten_errors(error: ValidationError) -> list[dict]:
    """Flatten pydantic errors into ``{loc, msg, type}`` dicts."""
    return [
        {
            "loc": ".".join(str(x) for x in err["loc"]),
            "msg": err["msg"],
            "type": err["type"],
        }
        for err in error.errors()
    ]
