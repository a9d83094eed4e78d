"""Graph layer: constraint mapping, element assembly and the element graph."""

from .node_types import NodeType, EdgeType
from .elements import ANCHOR_POSITION, EdgeDescriptor, ElementSet, Node, Point
from .constraint_map import ConstraintKind, map_constraint, normalize_kind
from .element_graph import ElementGraph
from .builder import assemble_elements, build_element_graph

__all__ = [
    "NodeType",
    "EdgeType",
    "ANCHOR_POSITION",
    "EdgeDescriptor",
    "ElementSet",
    "Node",
    "Point",
    "ConstraintKind",
    "map_constraint",
    "normalize_kind",
    "ElementGraph",
    "assemble_elements",
    "build_element_graph",
]
