"""Builder for converting a DeclareModel into graph elements."""

import logging

from ..schema.models import DeclareModel
from .constraint_map import map_constraint, normalize_kind
from .element_graph import ElementGraph
from .elements import (
    ANCHOR_POSITION,
    INIT_EDGE_CLASS,
    INIT_NODE_CLASS,
    EdgeDescriptor,
    ElementSet,
    Node,
)
from .node_types import EdgeType, NodeType

logger = logging.getLogger(__name__)

INIT_KIND = "init"


def decorator_node_id(activity: str) -> str:
    return f"init-{activity}"


def decorator_edge_id(activity: str) -> str:
    return f"edge-init-{activity}"


def find_init_activity(model: DeclareModel) -> str | None:
    """Get the activity of the first ``init`` unary constraint, if any.

    Kinds are compared after ``normalize_kind``, so ``"INIT"`` and
    ``"Init"`` count as ``init`` too. Surrounding whitespace does not
    get trimmed, so ``" init"`` is a different kind.
    """
    for unary in model.unary:
        if normalize_kind(unary.kind) == INIT_KIND:
            return unary.activity
    return None


def assemble_elements(model: DeclareModel) -> ElementSet:
    """Build the full element set for a model.

    Output order is activity nodes, decorator nodes, constraint edges
    (in constraint order, each in mapper order), then decorator edges.

    Args:
        model: A validated Declare model.

    Returns:
        The assembled ElementSet.
    """
    init_activity = find_init_activity(model)

    # Activity nodes; the entry activity is pinned to the anchor position
    nodes = []
    for activity in model.activities:
        if activity == init_activity:
            nodes.append(
                Node(
                    id=activity,
                    label=activity,
                    locked=True,
                    position=ANCHOR_POSITION,
                )
            )
        else:
            nodes.append(Node(id=activity, label=activity))

    # Decorator nodes and edges for every init constraint
    decorator_nodes: list[Node] = []
    decorator_edges: list[EdgeDescriptor] = []
    decorated: set[str] = set()
    activity_ids = set(model.activities)
    for unary in model.unary:
        if normalize_kind(unary.kind) != INIT_KIND:
            continue
        if unary.activity in decorated:
            logger.warning(
                "Skipping repeated init constraint for activity %r", unary.activity
            )
            continue
        decorated.add(unary.activity)

        node_id = decorator_node_id(unary.activity)
        if node_id in activity_ids:
            logger.warning(
                "Skipping init decorator for activity %r: id %r is a declared activity",
                unary.activity,
                node_id,
            )
            continue
        decorator_nodes.append(
            Node(
                id=node_id,
                label=INIT_KIND,
                node_type=NodeType.DECORATOR,
                locked=True,
                position=ANCHOR_POSITION,
                classes=(INIT_NODE_CLASS,),
                anchor=unary.activity,
            )
        )
        decorator_edges.append(
            EdgeDescriptor(
                id=decorator_edge_id(unary.activity),
                source=node_id,
                target=unary.activity,
                classes=(INIT_EDGE_CLASS,),
                constraint=INIT_KIND,
                edge_type=EdgeType.DECORATOR,
            )
        )

    # Constraint edges, indexed by position in the constraint list
    constraint_edges: list[EdgeDescriptor] = []
    for index, constraint in enumerate(model.constraints):
        constraint_edges.extend(
            map_constraint(constraint.kind, constraint.source, constraint.target, index)
        )

    elements = ElementSet(
        nodes=[*nodes, *decorator_nodes],
        edges=[*constraint_edges, *decorator_edges],
        constraint_count=len(model.constraints),
    )
    logger.debug(
        "Assembled %d nodes and %d edges from %d constraints",
        len(elements.nodes),
        len(elements.edges),
        elements.constraint_count,
    )
    return elements


def build_element_graph(model: DeclareModel) -> ElementGraph:
    """Assemble a model and load the elements into an ElementGraph."""
    return ElementGraph.from_elements(assemble_elements(model))
