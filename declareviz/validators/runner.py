"""Lint runner that orchestrates all checks."""

from pathlib import Path

from ..graph.builder import build_element_graph
from ..graph.element_graph import ElementGraph
from ..schema.loader import parse_model
from ..schema.models import DeclareModel
from .base import ValidationResult
from .constraint_kinds import check_constraint_kinds
from .reference_integrity import check_reference_integrity


def run_checks(model: DeclareModel, graph: ElementGraph) -> ValidationResult:
    """Run all checks on a model.

    Args:
        model: The validated model.
        graph: The element graph built from the model.

    Returns:
        Combined ValidationResult from all checks.
    """
    result = ValidationResult()
    result.merge(check_reference_integrity(model, graph))
    result.merge(check_constraint_kinds(model))
    return result


def check_model_file(path: str | Path) -> ValidationResult:
    """Load and lint a model file.

    Raises:
        SchemaLoadError: If the file cannot be loaded.
        SchemaValidationError: If the model fails schema validation.
    """
    model = parse_model(path)
    graph = build_element_graph(model)
    return run_checks(model, graph)
