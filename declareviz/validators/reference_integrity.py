"""Dangling activity reference check."""

from ..graph.builder import INIT_KIND
from ..graph.constraint_map import normalize_kind
from ..graph.element_graph import ElementGraph
from ..schema.models import DeclareModel
from .base import ValidationResult


def check_reference_integrity(
    model: DeclareModel, graph: ElementGraph
) -> ValidationResult:
    """Check that activity references resolve to declared activities.

    The graph is the source of truth: an activity counts as dangling when
    an edge created a placeholder node for it. Such constraints still
    render, so those findings are warnings. Blank activity ids are errors.

    Args:
        model: The validated model.
        graph: The element graph built from the model.

    Returns:
        ValidationResult with a warning per dangling reference.
    """
    result = ValidationResult()

    # Blank ids produce unreadable nodes and ambiguous edge ids
    for activity in [*model.activities, *model.referenced_activities()]:
        if not activity.strip():
            result.add_error(
                code="BLANK_ACTIVITY_ID",
                message="Activity id is empty or whitespace",
                activity=activity,
            )
            break

    missing = set(graph.missing_node_ids())
    if not missing:
        return result

    for index, constraint in enumerate(model.constraints):
        for role, activity in (("source", constraint.source), ("target", constraint.target)):
            if activity in missing:
                result.add_warning(
                    code="DANGLING_ACTIVITY_REF",
                    message=(
                        f"Constraint '{constraint.kind}' {role} references "
                        f"undeclared activity '{activity}'"
                    ),
                    activity=activity,
                    constraint_index=index,
                    role=role,
                )

    for unary in model.unary:
        if normalize_kind(unary.kind) == INIT_KIND and unary.activity in missing:
            result.add_warning(
                code="DANGLING_ACTIVITY_REF",
                message=(
                    f"Unary constraint '{unary.kind}' references "
                    f"undeclared activity '{unary.activity}'"
                ),
                activity=unary.activity,
                role="activity",
            )

    return result
