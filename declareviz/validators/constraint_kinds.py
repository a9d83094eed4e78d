"""Checks on constraint kinds that affect how a model is drawn."""

from ..graph.builder import INIT_KIND, decorator_node_id
from ..graph.constraint_map import is_known_kind, normalize_kind
from ..schema.models import DeclareModel
from .base import ValidationResult


def check_constraint_kinds(model: DeclareModel) -> ValidationResult:
    """Flag kinds that fall back to default drawing.

    This checks:
    - Binary kinds outside the notation table (drawn as labelled lines)
    - Unary kinds other than ``init`` (not drawn)
    - More than one ``init`` constraint (only the first is anchored)
    - ``init`` decorator ids that collide with a declared activity

    Args:
        model: The validated model.

    Returns:
        ValidationResult with info and warning issues.
    """
    result = ValidationResult()

    for index, constraint in enumerate(model.constraints):
        if not is_known_kind(constraint.kind):
            result.add_info(
                code="UNKNOWN_CONSTRAINT",
                message=(
                    f"Constraint kind '{normalize_kind(constraint.kind)}' has no "
                    "notation and is drawn as a labelled line"
                ),
                constraint_index=index,
                kind=constraint.kind,
            )

    init_activities = []
    for unary in model.unary:
        if normalize_kind(unary.kind) == INIT_KIND:
            init_activities.append(unary.activity)
        else:
            result.add_info(
                code="UNKNOWN_UNARY",
                message=f"Unary constraint kind '{unary.kind}' is not drawn",
                activity=unary.activity,
                kind=unary.kind,
            )

    if len(init_activities) > 1:
        result.add_warning(
            code="MULTIPLE_INIT",
            message=(
                f"{len(init_activities)} init constraints found; only "
                f"'{init_activities[0]}' is anchored"
            ),
            activity=init_activities[0],
            activities=init_activities,
        )

    declared = set(model.activities)
    for activity in dict.fromkeys(init_activities):
        node_id = decorator_node_id(activity)
        if node_id in declared:
            result.add_warning(
                code="DECORATOR_ID_CLASH",
                message=(
                    f"init marker id '{node_id}' is also a declared activity; "
                    "the marker is not drawn"
                ),
                activity=activity,
                decorator_id=node_id,
            )

    return result
