"""Node and edge type definitions for the element graph."""

from enum import Enum


class NodeType(str, Enum):
    """Types of nodes in the element graph."""

    ACTIVITY = "activity"
    DECORATOR = "decorator"  # Synthetic node carrying a unary marker


class EdgeType(str, Enum):
    """Types of edges in the element graph."""

    CONSTRAINT = "constraint"  # Binary constraint, expanded by the mapper
    DECORATOR = "decorator"  # Decorator node -> anchor activity
