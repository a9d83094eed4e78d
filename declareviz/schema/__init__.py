"""Schema layer for parsing and validating Declare models."""

from .errors import SchemaLoadError, SchemaValidationError
from .models import BinaryConstraint, DeclareModel, UnaryConstraint
from .loader import (
    load_document,
    parse_model,
    parse_model_from_string,
    validate_model,
)

__all__ = [
    "SchemaLoadError",
    "SchemaValidationError",
    "BinaryConstraint",
    "DeclareModel",
    "UnaryConstraint",
    "load_document",
    "parse_model",
    "parse_model_from_string",
    "validate_model",
]
