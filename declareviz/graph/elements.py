"""Graph element data types produced by the assembler."""

from dataclasses import dataclass, field
from typing import Iterator

from .node_types import EdgeType, NodeType


@dataclass(frozen=True)
class Point:
    x: float
    y: float


ANCHOR_POSITION = Point(0.0, 0.0)

INIT_NODE_CLASS = "init-node"
INIT_EDGE_CLASS = "init-edge"


@dataclass(frozen=True)
class Node:
    """A node element: an activity or a synthetic decorator.

    Locked nodes keep ``position`` through layout. Decorator nodes name
    the activity they follow in ``anchor``.
    """

    id: str
    label: str
    node_type: NodeType = NodeType.ACTIVITY
    locked: bool = False
    position: Point | None = None
    classes: tuple[str, ...] = ()
    anchor: str | None = None

    @property
    def is_decorator(self) -> bool:
        return self.node_type == NodeType.DECORATOR


@dataclass(frozen=True)
class EdgeDescriptor:
    """An edge element.

    ``classes`` are style tags for the style registry. ``constraint``
    holds the normalized constraint kind the edge was expanded from.
    """

    id: str
    source: str
    target: str
    classes: tuple[str, ...] = ()
    label: str | None = None
    constraint: str | None = None
    edge_type: EdgeType = EdgeType.CONSTRAINT

    @property
    def is_decorator(self) -> bool:
        return self.edge_type == EdgeType.DECORATOR


@dataclass(frozen=True)
class ElementSet:
    """The ordered element set for one model snapshot."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[EdgeDescriptor] = field(default_factory=list)
    constraint_count: int = 0

    @property
    def elements(self) -> list[Node | EdgeDescriptor]:
        """Nodes followed by edges, in assembly order."""
        return [*self.nodes, *self.edges]

    def ids(self) -> list[str]:
        """Get all element ids in assembly order."""
        return [element.id for element in self.elements]

    def get_node(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def iter_decorators(self) -> Iterator[Node]:
        return (node for node in self.nodes if node.is_decorator)

    def without_decorators(self) -> "ElementSet":
        """Get a copy holding only activity nodes and constraint edges."""
        return ElementSet(
            nodes=[node for node in self.nodes if not node.is_decorator],
            edges=[edge for edge in self.edges if not edge.is_decorator],
            constraint_count=self.constraint_count,
        )
