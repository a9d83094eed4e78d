"""ElementGraph wrapper around networkx for assembled elements."""

from typing import Iterator

import networkx as nx

from .elements import EdgeDescriptor, ElementSet, Node
from .node_types import NodeType


class ElementGraph:
    """A graph holding the elements of one rendering.

    Wraps a networkx MultiDiGraph keyed by edge id, so several edges of
    one constraint (or several constraints) can join the same pair of
    activities. Edges that name an undeclared node still get added; the
    endpoint becomes a placeholder node with no element attached.
    """

    def __init__(self):
        """Initialize an empty element graph."""
        self._graph = nx.MultiDiGraph()
        # networkx iterates edges by adjacency, not insertion
        self._edges: dict[str, EdgeDescriptor] = {}

    @classmethod
    def from_elements(cls, elements: ElementSet) -> "ElementGraph":
        """Build a graph from an assembled element set."""
        graph = cls()
        for node in elements.nodes:
            graph.add_node(node)
        for edge in elements.edges:
            graph.add_edge(edge)
        return graph

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Element management
    # -------------------------------------------------------------------------

    def add_node(self, node: Node) -> str:
        """Add a node element to the graph.

        Args:
            node: The node element.

        Returns:
            The node ID.
        """
        self._graph.add_node(node.id, element=node, node_type=node.node_type)
        return node.id

    def add_edge(self, edge: EdgeDescriptor) -> str:
        """Add an edge element to the graph.

        Args:
            edge: The edge element.

        Returns:
            The edge ID.
        """
        self._graph.add_edge(
            edge.source,
            edge.target,
            key=edge.id,
            element=edge,
            edge_type=edge.edge_type,
        )
        self._edges[edge.id] = edge
        return edge.id

    def clear(self) -> None:
        """Drop every node and edge."""
        self._graph.clear()
        self._edges.clear()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_node(self, node_id: str) -> Node | None:
        """Get a declared node by id."""
        if self._graph.has_node(node_id):
            return self._graph.nodes[node_id].get("element")
        return None

    def get_edge(self, edge_id: str) -> EdgeDescriptor | None:
        """Get an edge by id."""
        return self._edges.get(edge_id)

    def nodes(self) -> list[Node]:
        """Get declared nodes in insertion order (placeholders excluded)."""
        return [
            data["element"]
            for _, data in self._graph.nodes(data=True)
            if "element" in data
        ]

    def edges(self) -> list[EdgeDescriptor]:
        """Get all edges in insertion order."""
        return list(self._edges.values())

    def iter_edges(self) -> Iterator[EdgeDescriptor]:
        yield from self._edges.values()

    def decorator_nodes(self) -> list[Node]:
        """Get all decorator nodes."""
        return [
            node for node in self.nodes() if node.node_type == NodeType.DECORATOR
        ]

    def anchor_of(self, node_id: str) -> str | None:
        """Get the anchor activity id of a decorator node."""
        node = self.get_node(node_id)
        if node is None:
            return None
        return node.anchor

    def locked_node_ids(self) -> list[str]:
        """Get ids of nodes excluded from layout forces."""
        return [node.id for node in self.nodes() if node.locked]

    def missing_node_ids(self) -> list[str]:
        """Get ids referenced by edges but never declared as nodes."""
        return [
            node_id
            for node_id, data in self._graph.nodes(data=True)
            if "element" not in data
        ]

    def edges_between(self, source: str, target: str) -> list[EdgeDescriptor]:
        """Get all edges from source to target, in insertion order."""
        if not self._graph.has_edge(source, target):
            return []
        return [
            data["element"]
            for data in self._graph.get_edge_data(source, target).values()
        ]

    def __len__(self) -> int:
        return len(self.nodes())
